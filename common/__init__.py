"""
Common utilities and infrastructure for the Geotum projection engine.

This package provides foundational components used across all modules:
- Geodetic and UTM grid constants with provenance
- Unit handling for angle and length quantities
- Immutable coordinate value types
- Logging infrastructure
"""

from common.constants import GeodeticConstants
from common.units import ureg, Q_, angle_in_degrees, length_in_meters, validate_units
from common.types import (
    GeographicCoordinate,
    Hemisphere,
    UTMDistance,
    UTMPoint,
)
from common.logging_config import get_logger, set_engine_log_level

__all__ = [
    "GeodeticConstants",
    "ureg",
    "Q_",
    "angle_in_degrees",
    "length_in_meters",
    "validate_units",
    "GeographicCoordinate",
    "Hemisphere",
    "UTMDistance",
    "UTMPoint",
    "get_logger",
    "set_engine_log_level",
]
