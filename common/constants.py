"""
Geodetic Constants for UTM Projection.

This module provides the reference-ellipsoid and UTM grid constants with
their uncertainty bounds and sources. All constants are defined in SI
units (meters) or degrees for angular limits.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- UTM grid definition: DMA TM 8358.2, The Universal Grids (1989)
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A geodetic constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of constants used by the projection engine.

    Earth Geometry (WGS84)
    ----------------------
    Radii of the default reference ellipsoid.

    UTM Grid
    --------
    Scale factor, false origin offsets and domain limits. These are
    fixed by the grid definition and are never per-call parameters.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    WGS84_EQUATORIAL_RADIUS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    WGS84_POLAR_RADIUS: Final[Constant] = Constant(
        value=6_356_752.3,
        uncertainty=0.015,  # Rounded from 6356752.314245
        unit="m",
        source="WGS84, NIMA TR8350.2 (rounded to 0.1 m)",
        description="Semi-minor axis (polar radius) of WGS84 ellipsoid"
    )

    WGS84_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=298.257223563,
        uncertainty=0.0,
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Reciprocal flattening 1/f of WGS84 ellipsoid"
    )

    # =========================================================================
    # UTM Grid
    # Reference: DMA TM 8358.2
    # =========================================================================

    UTM_SCALE_FACTOR: Final[Constant] = Constant(
        value=0.9996,
        uncertainty=0.0,
        unit="dimensionless",
        source="DMA TM 8358.2",
        description="Scale factor k0 on the central meridian"
    )

    UTM_FALSE_EASTING: Final[Constant] = Constant(
        value=500_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="Easting assigned to the central meridian of every zone"
    )

    UTM_FALSE_NORTHING_SOUTH: Final[Constant] = Constant(
        value=10_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="Northing offset applied in the southern hemisphere"
    )

    UTM_MAX_LATITUDE: Final[Constant] = Constant(
        value=84.0,
        uncertainty=0.0,
        unit="degree",
        source="DMA TM 8358.2",
        description="Largest absolute latitude covered by the UTM grid"
    )

    UTM_ZONE_WIDTH: Final[Constant] = Constant(
        value=6.0,
        uncertainty=0.0,
        unit="degree",
        source="DMA TM 8358.2",
        description="Longitudinal width of a standard UTM zone"
    )

    UTM_ZONE_COUNT: Final[int] = 60

    MGRS_LATITUDE_BANDS: Final[str] = "CDEFGHJKLMNPQRSTUVWXX"  # I and O omitted; X spans 72-84

    EPSG_UTM_NORTH_BASE: Final[int] = 32600  # WGS 84 / UTM zone 1N is EPSG:32601
    EPSG_UTM_SOUTH_BASE: Final[int] = 32700


# Convenience exports for frequently used values
SCALE_FACTOR: Final[float] = GeodeticConstants.UTM_SCALE_FACTOR.value
FALSE_EASTING: Final[float] = GeodeticConstants.UTM_FALSE_EASTING.value
FALSE_NORTHING_SOUTH: Final[float] = GeodeticConstants.UTM_FALSE_NORTHING_SOUTH.value
MAX_LATITUDE_DEG: Final[float] = GeodeticConstants.UTM_MAX_LATITUDE.value
ZONE_WIDTH_DEG: Final[float] = GeodeticConstants.UTM_ZONE_WIDTH.value
