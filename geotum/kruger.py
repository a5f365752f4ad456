"""
Krüger Series Coefficients for the Transverse Mercator Projection.

The exact (Gauss-Krüger) transverse Mercator mapping is evaluated as a
trigonometric series in the conformal coordinates. Its coefficients are
polynomials in the third flattening n of the ellipsoid; six terms give
sub-millimeter accuracy within a UTM zone.

The coefficients depend only on the ellipsoid, so they are computed once
per ellipsoid and cached.

References
----------
- Krüger, L. (1912). Konforme Abbildung des Erdellipsoids in der Ebene.
- Karney, C.F.F. (2011). Transverse Mercator with an accuracy of a few
  nanometers. Journal of Geodesy, 85(8), 475-485. Eqs. (35), (36).
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from common.logging_config import get_logger
from geotum.ellipsoid import Ellipsoid

logger = get_logger(__name__)

SERIES_ORDER = 6


@dataclass(frozen=True)
class KrugerCoefficients:
    """Series coefficients for one ellipsoid.

    Attributes
    ----------
    n : float
        Third flattening.
    alpha : Tuple[float, ...]
        Six forward coefficients (conformal -> transverse Mercator).
    beta : Tuple[float, ...]
        Six inverse coefficients (transverse Mercator -> conformal).
    flattened_meridian_radius : float
        Rectifying radius A in meters; 2*pi*A is the meridian perimeter.
    """
    n: float
    alpha: Tuple[float, ...]
    beta: Tuple[float, ...]
    flattened_meridian_radius: float


def _alpha(n1: float, n2: float, n3: float, n4: float, n5: float, n6: float) -> Tuple[float, ...]:
    return (
        1/2*n1 - 2/3*n2 + 5/16*n3 + 41/180*n4 - 127/288*n5 + 7891/37800*n6,
        13/48*n2 - 3/5*n3 + 557/1440*n4 + 281/630*n5 - 1983433/1935360*n6,
        61/240*n3 - 103/140*n4 + 15061/26880*n5 + 167603/181440*n6,
        49561/161280*n4 - 179/168*n5 + 6601661/7257600*n6,
        34729/80640*n5 - 3418889/1995840*n6,
        212378941/319334400*n6,
    )


def _beta(n1: float, n2: float, n3: float, n4: float, n5: float, n6: float) -> Tuple[float, ...]:
    return (
        1/2*n1 - 2/3*n2 + 37/96*n3 - 1/360*n4 - 81/512*n5 + 96199/604800*n6,
        1/48*n2 + 1/15*n3 - 437/1440*n4 + 46/105*n5 - 1118711/3870720*n6,
        17/480*n3 - 37/840*n4 - 209/4480*n5 + 5569/90720*n6,
        4397/161280*n4 - 11/504*n5 - 830251/7257600*n6,
        4583/161280*n5 - 108847/3991680*n6,
        20648693/638668800*n6,
    )


@lru_cache(maxsize=32)
def kruger_coefficients(ellipsoid: Ellipsoid) -> KrugerCoefficients:
    """Compute the Krüger series coefficients for an ellipsoid.

    Parameters
    ----------
    ellipsoid : Ellipsoid
        Reference ellipsoid.

    Returns
    -------
    KrugerCoefficients
        Forward and inverse coefficients plus the rectifying radius.

    Notes
    -----
    A = a / (1 + n) * (1 + n²/4 + n⁴/64 + n⁶/256)

    Results are cached per ellipsoid; the returned object is immutable
    and may be shared between threads.
    """
    n1 = ellipsoid.third_flattening
    n2 = n1 * n1
    n3 = n2 * n1
    n4 = n3 * n1
    n5 = n4 * n1
    n6 = n5 * n1

    flattening_coefficient = 1 + n2/4 + n4/64 + n6/256
    radius = flattening_coefficient * ellipsoid.equatorial_radius / (1 + n1)

    coefficients = KrugerCoefficients(
        n=n1,
        alpha=_alpha(n1, n2, n3, n4, n5, n6),
        beta=_beta(n1, n2, n3, n4, n5, n6),
        flattened_meridian_radius=radius,
    )
    logger.debug(
        f"Computed Krüger coefficients for {ellipsoid.name or 'custom ellipsoid'}: "
        f"n={n1:.12e}, A={radius:.4f} m"
    )
    return coefficients
