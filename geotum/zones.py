"""
UTM Zone and MGRS Latitude Band Selection.

Standard UTM zones are 6 degrees of longitude wide, numbered 1..60
eastward from 180°W. Latitude bands are 8 degrees tall, lettered C..X
northward from 80°S (I and O are skipped), with band X stretched to 12
degrees so that it ends at 84°N.

Two regions deviate from the regular grid:

1. Norway: in band V, zone 32 is widened westward to 3°E at the expense
   of zone 31.
2. Svalbard: in band X, zones 32, 34 and 36 are not used; points falling
   in them are reassigned to a neighbouring zone.

The Norway rule is applied before the Svalbard rule, and both only after
the regular 6-degree zone has been computed.
"""

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from common.constants import GeodeticConstants, MAX_LATITUDE_DEG, ZONE_WIDTH_DEG
from common.logging_config import get_logger
from geotum.exceptions import OutOfDomainError

logger = get_logger(__name__)

ZONE_COUNT = GeodeticConstants.UTM_ZONE_COUNT
LATITUDE_BANDS = GeodeticConstants.MGRS_LATITUDE_BANDS

NORWAY_ZONE = 31
NORWAY_BAND = "V"
NORWAY_EAST_LIMIT_DEG = 3.0

SVALBARD_BAND = "X"
# Unused zone -> longitude below which the point goes to zone 31, else 33
SVALBARD_SPLITS = {
    32: 9.0,
    34: 21.0,
    36: 33.0,
}


def check_latitude(latitude_deg: float) -> None:
    """Raise OutOfDomainError when |latitude| exceeds the UTM limit."""
    if not abs(latitude_deg) <= MAX_LATITUDE_DEG:
        logger.warning(f"Rejecting latitude {latitude_deg} deg outside the UTM grid")
        raise OutOfDomainError(
            f"Latitude {latitude_deg} deg is outside the UTM domain "
            f"[-{MAX_LATITUDE_DEG:g}, {MAX_LATITUDE_DEG:g}]",
            latitude=latitude_deg
        )


def naive_zone(longitude_deg: float) -> int:
    """Regular 6-degree zone number for a longitude.

    Longitude +180 is the same meridian as -180 and falls in zone 1.
    """
    zone = int(np.floor((longitude_deg + 180.0) / ZONE_WIDTH_DEG)) + 1
    return (zone - 1) % ZONE_COUNT + 1


def latitude_band(latitude_deg: float) -> str:
    """MGRS latitude band letter for a latitude in degrees.

    Parameters
    ----------
    latitude_deg : float
        Latitude in degrees, within [-84, 84].

    Returns
    -------
    str
        Band letter C..X. Latitudes between 80°S and 84°S, below the
        southern edge of the lettered bands, are reported as band C.

    Raises
    ------
    OutOfDomainError
        If |latitude| > 84.
    """
    check_latitude(latitude_deg)
    index = int(np.floor(latitude_deg / 8 + 10))
    return LATITUDE_BANDS[max(index, 0)]


def apply_norway_exception(zone: int, band: str, longitude_deg: float) -> int:
    """Widen zone 32 over southwest Norway."""
    if zone == NORWAY_ZONE and band == NORWAY_BAND and longitude_deg >= NORWAY_EAST_LIMIT_DEG:
        return NORWAY_ZONE + 1
    return zone


def apply_svalbard_exception(zone: int, band: str, longitude_deg: float) -> int:
    """Reassign the unused band-X zones around Svalbard."""
    if band != SVALBARD_BAND or zone not in SVALBARD_SPLITS:
        return zone
    return 31 if longitude_deg < SVALBARD_SPLITS[zone] else 33


def zone_and_band(latitude_deg: float, longitude_deg: float) -> Tuple[int, str]:
    """Select the UTM zone and latitude band of a coordinate.

    Parameters
    ----------
    latitude_deg, longitude_deg : float
        Coordinate in degrees.

    Returns
    -------
    Tuple[int, str]
        (zone, band) with the Norway and Svalbard exceptions applied.

    Raises
    ------
    OutOfDomainError
        If |latitude| > 84.

    Examples
    --------
    >>> zone_and_band(61.042865, 4.684059)
    (32, 'V')
    """
    band = latitude_band(latitude_deg)
    zone = naive_zone(longitude_deg)
    zone = apply_norway_exception(zone, band, longitude_deg)
    zone = apply_svalbard_exception(zone, band, longitude_deg)
    return zone, band


def central_meridian(zone: int) -> float:
    """Longitude of a zone's central meridian in degrees."""
    return (zone - 1) * ZONE_WIDTH_DEG - 180.0 + ZONE_WIDTH_DEG / 2


def zones_for(
    latitudes_deg: NDArray[np.float64],
    longitudes_deg: NDArray[np.float64]
) -> NDArray[np.int64]:
    """Vectorized zone selection.

    Parameters
    ----------
    latitudes_deg, longitudes_deg : ndarray
        Coordinates in degrees; latitudes must already be within +/-84.

    Returns
    -------
    ndarray
        Zone numbers with the Norway and Svalbard exceptions applied.
    """
    lat = np.asarray(latitudes_deg, dtype=np.float64)
    lon = np.asarray(longitudes_deg, dtype=np.float64)

    zones = np.floor((lon + 180.0) / ZONE_WIDTH_DEG).astype(np.int64) + 1
    zones = (zones - 1) % ZONE_COUNT + 1

    band_index = np.clip(np.floor(lat / 8 + 10).astype(np.int64), 0, len(LATITUDE_BANDS) - 1)
    bands = np.array(list(LATITUDE_BANDS))[band_index]

    norway = (zones == NORWAY_ZONE) & (bands == NORWAY_BAND) & (lon >= NORWAY_EAST_LIMIT_DEG)
    zones = np.where(norway, NORWAY_ZONE + 1, zones)

    in_x = bands == SVALBARD_BAND
    for unused_zone, split_deg in SVALBARD_SPLITS.items():
        mask = in_x & (zones == unused_zone)
        zones = np.where(mask, np.where(lon < split_deg, 31, 33), zones)

    return zones
