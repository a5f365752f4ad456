"""
Type Definitions for Geographic and UTM Coordinates.

This module defines the immutable value types exchanged with the
projection engine. Every type is a frozen dataclass: the projectors build
new values rather than mutating inputs, so forward and inverse calls stay
referentially transparent.

Units
-----
- Angles are stored in DEGREES.
- Easting, northing and distances are stored in METERS.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

from common.constants import GeodeticConstants
from common.units import (
    AngleLike,
    LengthLike,
    STANDARD_UNITS,
    validate_units,
)


class Hemisphere(Enum):
    """Hemisphere of a UTM point, decided solely by the sign of latitude."""
    NORTHERN = "northern"
    SOUTHERN = "southern"

    @property
    def abbreviation(self) -> str:
        """Single-letter designator used in UTM notation ("N" or "S")."""
        return "N" if self is Hemisphere.NORTHERN else "S"

    @classmethod
    def from_latitude(cls, latitude_deg: float) -> 'Hemisphere':
        """Northern for latitude >= 0 (including the equator), else southern."""
        return cls.NORTHERN if latitude_deg >= 0 else cls.SOUTHERN


@dataclass(frozen=True)
class GeographicCoordinate:
    """A geodetic latitude/longitude pair.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in DEGREES. Range: [-90, 90].
    longitude : float
        Geodetic longitude in DEGREES. Normalized to [-180, 180].

    Notes
    -----
    - Latitude is positive north, negative south.
    - Longitude is positive east, negative west.
    - Latitudes beyond +/-84 degrees are valid coordinates but lie outside
      the UTM grid; the projector rejects them.

    Examples
    --------
    >>> coord = GeographicCoordinate(latitude=37.0837, longitude=-121.9981)
    >>> coord.latitude_rad  # doctest: +ELLIPSIS
    0.6472...
    """
    latitude: float  # degrees
    longitude: float  # degrees

    def __post_init__(self):
        """Validate latitude and normalize longitude."""
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(
                f"Latitude {self.latitude} deg out of range [-90, 90]. "
                f"Did you pass radians or swap latitude and longitude?"
            )
        if not -180.0 <= self.longitude <= 180.0:
            object.__setattr__(
                self, "longitude", (self.longitude + 180.0) % 360.0 - 180.0
            )

    @property
    def latitude_rad(self) -> float:
        """Latitude in radians."""
        return float(np.radians(self.latitude))

    @property
    def longitude_rad(self) -> float:
        """Longitude in radians."""
        return float(np.radians(self.longitude))

    def to_radians(self) -> Tuple[float, float]:
        """Return (latitude_rad, longitude_rad)."""
        return self.latitude_rad, self.longitude_rad

    @classmethod
    def from_degrees(cls, lat_deg: float, lon_deg: float) -> 'GeographicCoordinate':
        """Create a coordinate from degrees."""
        return cls(latitude=float(lat_deg), longitude=float(lon_deg))

    @classmethod
    def from_radians(cls, lat_rad: float, lon_rad: float) -> 'GeographicCoordinate':
        """Create a coordinate from radians."""
        return cls(
            latitude=float(np.degrees(lat_rad)),
            longitude=float(np.degrees(lon_rad))
        )

    @classmethod
    @validate_units({
        "latitude": STANDARD_UNITS["latitude"],
        "longitude": STANDARD_UNITS["longitude"],
    })
    def from_quantities(
        cls,
        latitude: AngleLike,
        longitude: AngleLike
    ) -> 'GeographicCoordinate':
        """Create a coordinate from pint angle quantities.

        Parameters
        ----------
        latitude, longitude : pint.Quantity or float
            Angles in any angular unit (degree, radian, arcminute, ...).
            Bare numbers are taken as degrees.

        Raises
        ------
        ValueError
            If a quantity is not an angle.
        """
        return cls(
            latitude=latitude,
            longitude=longitude
        )


@dataclass(frozen=True)
class UTMDistance:
    """Planar offset between two points of the same UTM zone.

    Attributes
    ----------
    easting : float
        Eastward offset in METERS.
    northing : float
        Northward offset in METERS.
    """
    easting: float  # m
    northing: float  # m

    @property
    def magnitude(self) -> float:
        """Grid distance in meters."""
        return float(np.hypot(self.easting, self.northing))


@dataclass(frozen=True)
class UTMPoint:
    """A point on the UTM grid.

    Attributes
    ----------
    easting : float
        Easting in METERS, including the 500 000 m false easting.
    northing : float
        Northing in METERS. In the southern hemisphere it includes the
        10 000 000 m false northing, so it is never negative.
    zone : int
        UTM zone number, 1..60.
    hemisphere : Hemisphere
        Hemisphere the northing is referenced to.
    """
    easting: float  # m
    northing: float  # m
    zone: int
    hemisphere: Hemisphere

    def __post_init__(self):
        """Validate zone and northing."""
        zone_count = GeodeticConstants.UTM_ZONE_COUNT
        if not 1 <= self.zone <= zone_count:
            raise ValueError(f"UTM zone {self.zone} out of range [1, {zone_count}]")
        if self.northing < 0:
            raise ValueError(
                f"Northing {self.northing} m is negative; southern points "
                f"carry a {GeodeticConstants.UTM_FALSE_NORTHING_SOUTH.value:.0f} m false northing"
            )
        if not isinstance(self.hemisphere, Hemisphere):
            object.__setattr__(self, "hemisphere", Hemisphere(self.hemisphere))

    def __sub__(self, other: 'UTMPoint') -> UTMDistance:
        if not isinstance(other, UTMPoint):
            return NotImplemented
        if (self.zone, self.hemisphere) != (other.zone, other.hemisphere):
            raise ValueError(
                f"Cannot subtract points from different grid zones: "
                f"{self.zone}{self.hemisphere.abbreviation} and "
                f"{other.zone}{other.hemisphere.abbreviation}"
            )
        return UTMDistance(
            easting=self.easting - other.easting,
            northing=self.northing - other.northing
        )

    def __add__(self, offset: UTMDistance) -> 'UTMPoint':
        if not isinstance(offset, UTMDistance):
            return NotImplemented
        return UTMPoint(
            easting=self.easting + offset.easting,
            northing=self.northing + offset.northing,
            zone=self.zone,
            hemisphere=self.hemisphere
        )

    @classmethod
    @validate_units({
        "easting": STANDARD_UNITS["easting"],
        "northing": STANDARD_UNITS["northing"],
    })
    def from_quantities(
        cls,
        easting: LengthLike,
        northing: LengthLike,
        zone: int,
        hemisphere: Hemisphere
    ) -> 'UTMPoint':
        """Create a point from pint length quantities (bare numbers are meters)."""
        return cls(
            easting=easting,
            northing=northing,
            zone=int(zone),
            hemisphere=hemisphere
        )
