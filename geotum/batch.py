"""
Vectorized UTM Projection for Batch Processing.

Each conversion is independent of every other, so a batch is evaluated
as whole-array numpy expressions rather than a Python loop. The numerical
helpers are shared with `geotum.transverse_mercator`; element by element
the results are identical to the scalar path.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from common.constants import FALSE_EASTING, FALSE_NORTHING_SOUTH, MAX_LATITUDE_DEG
from common.logging_config import get_logger
from common.types import Hemisphere, UTMPoint
from geotum.ellipsoid import WGS84, Ellipsoid
from geotum.exceptions import ConvergenceError, OutOfDomainError
from geotum.transverse_mercator import (
    DEFAULT_SOLVER,
    InverseSolverConfig,
    newton_step,
    project_forward,
    project_inverse,
)
from geotum.zones import ZONE_COUNT, ZONE_WIDTH_DEG, zones_for

logger = get_logger(__name__)


@dataclass(frozen=True)
class UTMBatch:
    """UTM coordinates of many points.

    Attributes
    ----------
    easting : ndarray
        Eastings in meters.
    northing : ndarray
        Northings in meters (southern points include the false northing).
    zone : ndarray
        Zone numbers 1..60.
    northern : ndarray
        True where the point lies in the northern hemisphere.
    """
    easting: NDArray[np.float64]
    northing: NDArray[np.float64]
    zone: NDArray[np.int64]
    northern: NDArray[np.bool_]

    def __len__(self) -> int:
        return int(self.easting.shape[0])

    def points(self) -> list:
        """Expand the batch into UTMPoint values."""
        return [
            UTMPoint(
                easting=float(e),
                northing=float(n),
                zone=int(z),
                hemisphere=Hemisphere.NORTHERN if north else Hemisphere.SOUTHERN
            )
            for e, n, z, north in zip(self.easting, self.northing, self.zone, self.northern)
        ]


def _central_meridians(zones: NDArray[np.int64]) -> NDArray[np.float64]:
    return (zones - 1) * ZONE_WIDTH_DEG - 180.0 + ZONE_WIDTH_DEG / 2


def to_utm_batch(
    latitudes_deg: NDArray[np.float64],
    longitudes_deg: NDArray[np.float64],
    ellipsoid: Ellipsoid = WGS84
) -> UTMBatch:
    """Project arrays of geographic coordinates onto the UTM grid.

    Parameters
    ----------
    latitudes_deg, longitudes_deg : ndarray
        Coordinates in degrees; any shape, flattened to 1-D.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    UTMBatch
        Per-point easting, northing, zone and hemisphere flag.

    Raises
    ------
    OutOfDomainError
        If any |latitude| exceeds 84 degrees.
    """
    lat = np.asarray(latitudes_deg, dtype=np.float64).ravel()
    lon = np.asarray(longitudes_deg, dtype=np.float64).ravel()
    if lat.shape != lon.shape:
        raise ValueError(f"Shape mismatch: {lat.shape} latitudes vs {lon.shape} longitudes")

    outside = ~(np.abs(lat) <= MAX_LATITUDE_DEG)
    if np.any(outside):
        count = int(np.sum(outside))
        logger.warning(f"Rejecting batch: {count} of {lat.size} latitudes outside the UTM grid")
        raise OutOfDomainError(
            f"{count} latitude(s) outside the UTM domain "
            f"[-{MAX_LATITUDE_DEG:g}, {MAX_LATITUDE_DEG:g}]"
        )

    zones = zones_for(lat, lon)
    delta_lon = np.radians(lon - _central_meridians(zones))

    x, y = project_forward(np.radians(lat), delta_lon, ellipsoid)

    northern = lat >= 0
    easting = x + FALSE_EASTING
    northing = np.where(northern, y, y + FALSE_NORTHING_SOUTH)

    logger.debug(f"Projected {lat.size} points to UTM")
    return UTMBatch(
        easting=easting,
        northing=northing,
        zone=zones,
        northern=northern
    )


def to_geographic_batch(
    eastings: NDArray[np.float64],
    northings: NDArray[np.float64],
    zones: NDArray[np.int64],
    northern: NDArray[np.bool_],
    ellipsoid: Ellipsoid = WGS84,
    solver: Optional[InverseSolverConfig] = None
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Recover geographic coordinates for arrays of UTM points.

    Parameters
    ----------
    eastings, northings : ndarray
        Grid coordinates in meters.
    zones : ndarray
        Zone numbers 1..60.
    northern : ndarray of bool
        Hemisphere flags (True for northern).
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).
    solver : InverseSolverConfig, optional
        Newton settings.

    Returns
    -------
    Tuple[ndarray, ndarray]
        (latitudes_deg, longitudes_deg); longitudes normalized to [-180, 180].

    Raises
    ------
    ConvergenceError
        If any element fails to converge within the iteration bound.
    """
    solver = solver or DEFAULT_SOLVER

    e = np.asarray(eastings, dtype=np.float64).ravel()
    n = np.asarray(northings, dtype=np.float64).ravel()
    z = np.asarray(zones, dtype=np.int64).ravel()
    north = np.asarray(northern, dtype=bool).ravel()

    if np.any((z < 1) | (z > ZONE_COUNT)):
        raise ValueError(f"UTM zones must lie in [1, {ZONE_COUNT}]")

    x = e - FALSE_EASTING
    y = np.where(north, n, n - FALSE_NORTHING_SOUTH)

    tau_prime, delta_lon = project_inverse(x, y, ellipsoid)

    eccentricity = ellipsoid.eccentricity
    tau = np.array(tau_prime, dtype=np.float64)
    converged = np.zeros(tau.shape, dtype=bool)
    step = np.full(tau.shape, np.inf)
    for iteration in range(1, solver.max_iterations + 1):
        step = np.where(converged, 0.0, newton_step(tau, tau_prime, eccentricity))
        tau = tau + step
        converged |= np.abs(step) <= solver.tolerance
        if np.all(converged):
            logger.debug(f"Batch of {tau.size} converged after {iteration} iterations")
            break
    else:
        failed = int(np.sum(~converged))
        logger.warning(f"{failed} of {tau.size} points did not converge")
        raise ConvergenceError(
            f"{failed} point(s) did not reach tolerance {solver.tolerance} "
            f"within {solver.max_iterations} iterations",
            iterations=solver.max_iterations,
            last_step=float(np.max(np.abs(step[~converged])))
        )

    latitudes = np.degrees(np.arctan(tau))
    longitudes = np.degrees(delta_lon) + _central_meridians(z)
    outside = (longitudes < -180.0) | (longitudes > 180.0)
    longitudes = np.where(outside, (longitudes + 180.0) % 360.0 - 180.0, longitudes)
    return latitudes, longitudes
