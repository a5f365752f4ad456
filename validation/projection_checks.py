"""
Projection Consistency Checks.

This module provides checks that the projection engine obeys the
properties a correct transverse Mercator implementation must have. They
are meant to be run against a deployment (different numpy builds,
custom ellipsoids) rather than only in the unit test suite.

Check Categories
----------------
1. Round trip: geographic -> UTM -> geographic returns the input.
2. Reverse round trip: UTM -> geographic -> UTM returns the input.
3. Reference vectors: published coordinate pairs are reproduced.
4. False northing: southern points are offset, never negative.
5. Independent engine: results agree with PROJ.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from common.logging_config import get_logger
from common.constants import FALSE_NORTHING_SOUTH, MAX_LATITUDE_DEG
from common.types import GeographicCoordinate, Hemisphere, UTMPoint
from geotum.batch import to_geographic_batch, to_utm_batch
from geotum.crs import ProjReferenceTransformer
from geotum.ellipsoid import WGS84, Ellipsoid
from geotum.transverse_mercator import project_forward, to_utm
from geotum.zones import central_meridian

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the check.
    passed : bool
        Whether the check passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


@dataclass(frozen=True)
class ReferenceVector:
    """A published geographic/UTM pair."""
    coordinate: GeographicCoordinate
    expected: UTMPoint
    tolerance_m: float = 1.0


REFERENCE_VECTORS: Tuple[ReferenceVector, ...] = (
    ReferenceVector(
        coordinate=GeographicCoordinate(latitude=37.0837, longitude=-121.9981),
        expected=UTMPoint(easting=589048.6, northing=4104627.0, zone=10, hemisphere=Hemisphere.NORTHERN),
    ),
)


def sample_grid(
    lat_step_deg: float = 4.0,
    lon_step_deg: float = 7.0
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Regular grid of coordinates covering the UTM domain.

    The grid is offset from zone edges, band edges and the +/-84 limit so
    that round-off in a round trip cannot move a point across a boundary.
    """
    lats = np.arange(-79.0, MAX_LATITUDE_DEG, lat_step_deg)
    lons = np.arange(-179.5, 180.0, lon_step_deg)
    lat_grid, lon_grid = np.meshgrid(lats, lons, indexing="ij")
    return lat_grid.ravel(), lon_grid.ravel()


class ProjectionConsistencyChecker:
    """Checker for consistency of forward and inverse projections.

    Parameters
    ----------
    ellipsoid : Ellipsoid
        Ellipsoid under test.
    strict_mode : bool
        If True, raise AssertionError on the first failed check.
    log_violations : bool
        Whether to log failed checks.
    """

    def __init__(
        self,
        ellipsoid: Ellipsoid = WGS84,
        strict_mode: bool = False,
        log_violations: bool = True
    ):
        self.ellipsoid = ellipsoid
        self.strict_mode = strict_mode
        self.log_violations = log_violations
        self._logger = logger

    def _report(self, result: ValidationResult) -> ValidationResult:
        if not result.passed:
            if self.log_violations:
                self._logger.warning(f"{result.test_name} FAILED: {result.message}")
            if self.strict_mode:
                raise AssertionError(f"{result.test_name}: {result.message}")
        return result

    def check_all(
        self,
        latitudes_deg: Optional[NDArray[np.float64]] = None,
        longitudes_deg: Optional[NDArray[np.float64]] = None
    ) -> List[ValidationResult]:
        """Run all checks over a set of coordinates (default: global grid).

        Parameters
        ----------
        latitudes_deg, longitudes_deg : ndarray, optional
            Sample coordinates in degrees.

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        if latitudes_deg is None or longitudes_deg is None:
            latitudes_deg, longitudes_deg = sample_grid()

        results = []

        # 1. Geographic round trip
        results.append(self.check_round_trip(latitudes_deg, longitudes_deg))

        # 2. Grid round trip
        results.append(self.check_reverse_round_trip(latitudes_deg, longitudes_deg))

        # 3. Published values
        results.append(self.check_reference_vectors())

        # 4. Southern false northing
        results.append(self.check_southern_false_northing(latitudes_deg, longitudes_deg))

        # 5. Independent engine; PROJ only knows the WGS84 zones
        if self.ellipsoid == WGS84:
            coordinates = [
                GeographicCoordinate.from_degrees(lat, lon)
                for lat, lon in zip(np.ravel(latitudes_deg), np.ravel(longitudes_deg))
            ]
            results.append(self.check_against_proj(coordinates))

        return results

    def check_round_trip(
        self,
        latitudes_deg: NDArray[np.float64],
        longitudes_deg: NDArray[np.float64],
        tolerance_deg: float = 5e-4
    ) -> ValidationResult:
        """Check geographic -> UTM -> geographic within tolerance."""
        lat = np.asarray(latitudes_deg, dtype=np.float64).ravel()
        lon = np.asarray(longitudes_deg, dtype=np.float64).ravel()

        batch = to_utm_batch(lat, lon, self.ellipsoid)
        lat2, lon2 = to_geographic_batch(
            batch.easting, batch.northing, batch.zone, batch.northern, self.ellipsoid
        )

        lat_error = np.abs(lat2 - lat)
        lon_error = np.abs((lon2 - lon + 180.0) % 360.0 - 180.0)
        max_error = float(max(np.max(lat_error, initial=0.0), np.max(lon_error, initial=0.0)))

        return self._report(ValidationResult(
            test_name="round_trip",
            passed=max_error <= tolerance_deg,
            message=f"Round trip check: max error {max_error:.3e} deg",
            details={
                'num_points': int(lat.size),
                'max_latitude_error_deg': float(np.max(lat_error, initial=0.0)),
                'max_longitude_error_deg': float(np.max(lon_error, initial=0.0)),
                'tolerance_deg': tolerance_deg,
            }
        ))

    def check_reverse_round_trip(
        self,
        latitudes_deg: NDArray[np.float64],
        longitudes_deg: NDArray[np.float64],
        tolerance_m: float = 0.5
    ) -> ValidationResult:
        """Check UTM -> geographic -> UTM within tolerance.

        The UTM points are produced from the sample coordinates so that
        each lies inside its zone's legitimate range.
        """
        batch = to_utm_batch(latitudes_deg, longitudes_deg, self.ellipsoid)
        lat, lon = to_geographic_batch(
            batch.easting, batch.northing, batch.zone, batch.northern, self.ellipsoid
        )
        again = to_utm_batch(lat, lon, self.ellipsoid)

        easting_error = np.abs(again.easting - batch.easting)
        northing_error = np.abs(again.northing - batch.northing)
        hemisphere_mismatches = int(np.sum(again.northern != batch.northern))
        max_error = float(max(np.max(easting_error, initial=0.0), np.max(northing_error, initial=0.0)))

        return self._report(ValidationResult(
            test_name="reverse_round_trip",
            passed=max_error <= tolerance_m and hemisphere_mismatches == 0,
            message=(
                f"Reverse round trip check: max error {max_error:.3e} m, "
                f"{hemisphere_mismatches} hemisphere mismatches"
            ),
            details={
                'max_easting_error_m': float(np.max(easting_error, initial=0.0)),
                'max_northing_error_m': float(np.max(northing_error, initial=0.0)),
                'hemisphere_mismatches': hemisphere_mismatches,
                'tolerance_m': tolerance_m,
            }
        ))

    def check_reference_vectors(
        self,
        vectors: Sequence[ReferenceVector] = REFERENCE_VECTORS
    ) -> ValidationResult:
        """Check that published coordinate pairs are reproduced."""
        errors = []
        for vector in vectors:
            actual = to_utm(vector.coordinate, self.ellipsoid)
            if (actual.zone, actual.hemisphere) != (vector.expected.zone, vector.expected.hemisphere):
                errors.append(np.inf)
                continue
            errors.append((actual - vector.expected).magnitude)

        failures = sum(
            1 for error, vector in zip(errors, vectors) if not error <= vector.tolerance_m
        )

        return self._report(ValidationResult(
            test_name="reference_vectors",
            passed=failures == 0,
            message=f"Reference vector check: {failures} of {len(vectors)} failed",
            details={
                'errors_m': [float(e) for e in errors],
                'num_failures': failures,
            }
        ))

    def check_southern_false_northing(
        self,
        latitudes_deg: NDArray[np.float64],
        longitudes_deg: NDArray[np.float64],
        tolerance_m: float = 1e-6
    ) -> ValidationResult:
        """Check northing offsets of southern points.

        A southern point's northing must equal the raw transverse Mercator
        y of the point, computed about its own zone's central meridian,
        plus the false northing.
        """
        lat = np.asarray(latitudes_deg, dtype=np.float64).ravel()
        lon = np.asarray(longitudes_deg, dtype=np.float64).ravel()
        south = lat < 0
        if not np.any(south):
            return ValidationResult(
                test_name="southern_false_northing",
                passed=True,
                message="No southern points to check",
                details={}
            )

        southern = to_utm_batch(lat[south], lon[south], self.ellipsoid)
        delta_lon = np.radians(lon[south] - central_meridian(southern.zone))
        _, raw_y = project_forward(np.radians(lat[south]), delta_lon, self.ellipsoid)

        negative = int(np.sum(southern.northing < 0))
        wrong_hemisphere = int(np.sum(southern.northern))
        offset_error = np.abs(southern.northing - (raw_y + FALSE_NORTHING_SOUTH))
        max_offset_error = float(np.max(offset_error))

        return self._report(ValidationResult(
            test_name="southern_false_northing",
            passed=negative == 0 and wrong_hemisphere == 0 and max_offset_error <= tolerance_m,
            message=(
                f"Southern false northing check: {negative} negative, "
                f"{wrong_hemisphere} flagged northern, "
                f"max offset error {max_offset_error:.3e} m"
            ),
            details={
                'num_points': int(np.sum(south)),
                'max_offset_error_m': max_offset_error,
                'tolerance_m': tolerance_m,
            }
        ))

    def check_against_proj(
        self,
        coordinates: Sequence[GeographicCoordinate],
        tolerance_m: float = 0.5
    ) -> ValidationResult:
        """Compare forward projections with PROJ in the same zone.

        Only meaningful for WGS84; PROJ is always run on its WGS84 zones.
        """
        transformers: Dict[Tuple[int, Hemisphere], ProjReferenceTransformer] = {}
        max_error = 0.0
        for coordinate in coordinates:
            ours = to_utm(coordinate, self.ellipsoid)
            key = (ours.zone, ours.hemisphere)
            if key not in transformers:
                transformers[key] = ProjReferenceTransformer(*key)
            theirs = transformers[key].to_utm(coordinate)
            max_error = max(max_error, (ours - theirs).magnitude)

        return self._report(ValidationResult(
            test_name="proj_agreement",
            passed=max_error <= tolerance_m,
            message=f"PROJ agreement check: max difference {max_error:.3e} m",
            details={
                'num_points': len(coordinates),
                'num_zones': len(transformers),
                'max_difference_m': max_error,
            }
        ))
