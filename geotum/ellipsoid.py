"""
Reference Ellipsoid Models.

A planet is described by its equatorial and polar radii; flattening and
eccentricity are derived from them. The WGS84 ellipsoid is the default
for every projection in this package, but any ellipsoid can be plugged
in.

References
----------
- NIMA TR8350.2: WGS84 parameters
- Snyder, J.P. (1987). Map Projections - A Working Manual. Table 1.
"""

from dataclasses import dataclass

import numpy as np

from common.constants import GeodeticConstants


@dataclass(frozen=True)
class Ellipsoid:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    equatorial_radius : float
        Semi-major axis in meters.
    polar_radius : float
        Semi-minor axis in meters.
    name : str
        Identifier for the ellipsoid.

    Derived Parameters
    ------------------
    flattening : float
        f = (a - b) / a
    inverse_flattening : float
        1 / f
    eccentricity : float
        First eccentricity e = sqrt(f (2 - f))
    third_flattening : float
        n = f / (2 - f) = (a - b) / (a + b)
    """
    equatorial_radius: float
    polar_radius: float
    name: str = ""

    def __post_init__(self):
        """Validate radii."""
        if not self.equatorial_radius > 0:
            raise ValueError(f"Equatorial radius must be positive, got {self.equatorial_radius}")
        if not 0 < self.polar_radius < self.equatorial_radius:
            raise ValueError(
                f"Polar radius {self.polar_radius} m must lie in (0, {self.equatorial_radius}) m"
            )

    @classmethod
    def from_inverse_flattening(
        cls,
        equatorial_radius: float,
        inverse_flattening: float,
        name: str = ""
    ) -> 'Ellipsoid':
        """Create an ellipsoid from its semi-major axis and 1/f.

        Parameters
        ----------
        equatorial_radius : float
            Semi-major axis in meters.
        inverse_flattening : float
            Reciprocal flattening, e.g. 298.257223563 for WGS84.
        """
        polar_radius = equatorial_radius * (inverse_flattening - 1) / inverse_flattening
        return cls(equatorial_radius=equatorial_radius, polar_radius=polar_radius, name=name)

    @property
    def flattening(self) -> float:
        """Flattening f."""
        return (self.equatorial_radius - self.polar_radius) / self.equatorial_radius

    @property
    def inverse_flattening(self) -> float:
        """Reciprocal flattening 1/f."""
        return 1.0 / self.flattening

    @property
    def eccentricity_squared(self) -> float:
        """First eccentricity squared."""
        return self.flattening * (2 - self.flattening)

    @property
    def eccentricity(self) -> float:
        """First eccentricity."""
        return float(np.sqrt(self.eccentricity_squared))

    @property
    def third_flattening(self) -> float:
        """Third flattening n, the expansion parameter of the Krüger series."""
        return self.flattening / (2 - self.flattening)


# WGS84 ellipsoid - the default reference for all projections
WGS84 = Ellipsoid(
    equatorial_radius=GeodeticConstants.WGS84_EQUATORIAL_RADIUS.value,
    polar_radius=GeodeticConstants.WGS84_POLAR_RADIUS.value,
    name="WGS84"
)

GRS80 = Ellipsoid.from_inverse_flattening(6_378_137.0, 298.257222101, name="GRS80")

INTERNATIONAL_1924 = Ellipsoid.from_inverse_flattening(6_378_388.0, 297.0, name="International 1924")

CLARKE_1866 = Ellipsoid(6_378_206.4, 6_356_583.8, name="Clarke 1866")

KNOWN_ELLIPSOIDS = {
    ellipsoid.name: ellipsoid
    for ellipsoid in (WGS84, GRS80, INTERNATIONAL_1924, CLARKE_1866)
}
