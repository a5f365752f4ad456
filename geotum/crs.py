"""
Coordinate Reference System Interoperability.

Maps UTM zones to their EPSG identifiers and `pyproj` CRS objects, and
provides a PROJ-backed reference transform so results of the Krüger
implementation can be cross-checked against an independent engine.

Implementation
--------------
This module wraps the `pyproj` library (PROJ), which implements the same
Krüger-series transverse Mercator ("etmerc") as the default `tmerc`
algorithm since PROJ 6.
"""

from typing import Tuple

from pyproj import CRS, Transformer

from common.constants import GeodeticConstants
from common.logging_config import get_logger
from common.types import GeographicCoordinate, Hemisphere, UTMPoint

logger = get_logger(__name__)

WGS84_GEOGRAPHIC_EPSG = 4326


def utm_epsg_code(zone: int, hemisphere: Hemisphere) -> int:
    """EPSG code of a WGS84 UTM zone (326zz north, 327zz south).

    Examples
    --------
    >>> utm_epsg_code(10, Hemisphere.NORTHERN)
    32610
    """
    zone_count = GeodeticConstants.UTM_ZONE_COUNT
    if not 1 <= zone <= zone_count:
        raise ValueError(f"UTM zone {zone} out of range [1, {zone_count}]")
    if hemisphere is Hemisphere.NORTHERN:
        return GeodeticConstants.EPSG_UTM_NORTH_BASE + zone
    return GeodeticConstants.EPSG_UTM_SOUTH_BASE + zone


def utm_crs(zone: int, hemisphere: Hemisphere) -> CRS:
    """pyproj CRS of a WGS84 UTM zone."""
    return CRS.from_epsg(utm_epsg_code(zone, hemisphere))


class ProjReferenceTransformer:
    """PROJ-backed projection between WGS84 and one UTM zone.

    Parameters
    ----------
    zone : int
        UTM zone number, 1..60.
    hemisphere : Hemisphere
        Hemisphere of the zone.

    Notes
    -----
    PROJ uses the exact WGS84 polar radius (6356752.314245 m); the
    package's WGS84 constant is rounded to 0.1 m, which shifts projected
    coordinates by a few centimeters at most.
    """

    def __init__(self, zone: int, hemisphere: Hemisphere):
        self._zone = zone
        self._hemisphere = hemisphere

        self._crs_geo = CRS.from_epsg(WGS84_GEOGRAPHIC_EPSG)
        self._crs_proj = utm_crs(zone, hemisphere)
        self._to_proj = Transformer.from_crs(self._crs_geo, self._crs_proj, always_xy=True)
        self._to_geo = Transformer.from_crs(self._crs_proj, self._crs_geo, always_xy=True)
        logger.debug(f"Created PROJ reference transformer for {self._crs_proj.name}")

    @property
    def name(self) -> str:
        return self._crs_proj.name

    @property
    def epsg_code(self) -> int:
        return utm_epsg_code(self._zone, self._hemisphere)

    def to_projected(self, coordinate: GeographicCoordinate) -> Tuple[float, float]:
        """(easting, northing) in meters, computed by PROJ."""
        x, y = self._to_proj.transform(coordinate.longitude, coordinate.latitude)
        return float(x), float(y)

    def to_utm(self, coordinate: GeographicCoordinate) -> UTMPoint:
        """Project into this transformer's zone, whatever zone the point naturally falls in."""
        easting, northing = self.to_projected(coordinate)
        return UTMPoint(easting=easting, northing=northing, zone=self._zone, hemisphere=self._hemisphere)

    def to_geographic(self, point: UTMPoint) -> GeographicCoordinate:
        """Inverse projection by PROJ."""
        if (point.zone, point.hemisphere) != (self._zone, self._hemisphere):
            raise ValueError(
                f"Point in zone {point.zone}{point.hemisphere.abbreviation} given to "
                f"transformer for zone {self._zone}{self._hemisphere.abbreviation}"
            )
        lon, lat = self._to_geo.transform(point.easting, point.northing)
        return GeographicCoordinate(latitude=float(lat), longitude=float(lon))
