"""
Geotum: Geographic <-> UTM Projection Engine.

All conversions between latitude/longitude and Universal Transverse
Mercator grid coordinates originate from this package.

This package provides:
- Reference ellipsoid models (WGS84 and others)
- Krüger series coefficients for the transverse Mercator projection
- UTM zone and MGRS latitude band selection (Norway/Svalbard exceptions)
- Forward and inverse projection, scalar and vectorized
- EPSG/pyproj interoperability
"""

from geotum.exceptions import (
    GeotumError,
    OutOfDomainError,
    ConvergenceError,
)

from geotum.ellipsoid import (
    Ellipsoid,
    WGS84,
    GRS80,
    INTERNATIONAL_1924,
    CLARKE_1866,
)

from geotum.kruger import (
    KrugerCoefficients,
    kruger_coefficients,
)

from geotum.zones import (
    zone_and_band,
    latitude_band,
    central_meridian,
)

from geotum.transverse_mercator import (
    InverseSolverConfig,
    UTMConverter,
    to_utm,
    to_geographic,
)

from geotum.batch import (
    UTMBatch,
    to_utm_batch,
    to_geographic_batch,
)

__all__ = [
    # Errors
    "GeotumError",
    "OutOfDomainError",
    "ConvergenceError",
    # Ellipsoids
    "Ellipsoid",
    "WGS84",
    "GRS80",
    "INTERNATIONAL_1924",
    "CLARKE_1866",
    # Series coefficients
    "KrugerCoefficients",
    "kruger_coefficients",
    # Zones
    "zone_and_band",
    "latitude_band",
    "central_meridian",
    # Projection
    "InverseSolverConfig",
    "UTMConverter",
    "to_utm",
    "to_geographic",
    # Batch
    "UTMBatch",
    "to_utm_batch",
    "to_geographic_batch",
]
