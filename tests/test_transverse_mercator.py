import dataclasses
import math

import numpy as np
import pytest

from common.types import GeographicCoordinate, Hemisphere, UTMPoint
from geotum.ellipsoid import GRS80, INTERNATIONAL_1924, WGS84
from geotum.exceptions import ConvergenceError, OutOfDomainError
from geotum.transverse_mercator import (
    InverseSolverConfig,
    UTMConverter,
    conformal_tau,
    solve_tau,
    to_geographic,
    to_utm,
)


ROUND_TRIP_COORDINATES = [
    (37.0837, -121.9981),
    (-33.8568, 151.2153),
    (61.042865, 4.684059),
    (78.0, 15.0),
    (78.0, 20.0),
    (83.99, -40.0),
    (-83.99, 100.0),
    (0.0, 3.0),
    (0.001, -179.999),
    (-0.001, 179.999),
    (45.0, 2.999),
    (-62.5, -67.01),
]


def test_reference_vector(reference_coordinate, reference_point):
    point = to_utm(reference_coordinate)

    assert point.zone == 10
    assert point.hemisphere is Hemisphere.NORTHERN
    assert point.easting == pytest.approx(reference_point.easting, abs=1.0)
    assert point.northing == pytest.approx(reference_point.northing, abs=1.0)


def test_origin_of_zone_maps_to_false_easting():
    point = to_utm(GeographicCoordinate(0.0, 3.0))

    assert point.zone == 31
    assert point.easting == pytest.approx(500000.0, abs=1e-9)
    assert point.northing == pytest.approx(0.0, abs=1e-9)
    assert point.hemisphere is Hemisphere.NORTHERN


def test_easting_is_symmetric_about_central_meridian():
    east = to_utm(GeographicCoordinate(48.0, -120.5))
    west = to_utm(GeographicCoordinate(48.0, -125.5))

    assert east.zone == west.zone == 10
    assert east.easting - 500000.0 == pytest.approx(500000.0 - west.easting, abs=1e-6)
    assert east.northing == pytest.approx(west.northing, abs=1e-6)


def test_southern_points_carry_false_northing():
    south = to_utm(GeographicCoordinate(-33.8568, 151.2153))
    north = to_utm(GeographicCoordinate(33.8568, 151.2153))

    assert south.zone == 56
    assert south.hemisphere is Hemisphere.SOUTHERN
    assert 0 < south.northing < 10_000_000
    assert south.northing == pytest.approx(10_000_000 - north.northing, abs=1e-6)


def test_equator_belongs_to_northern_hemisphere():
    on_equator = to_utm(GeographicCoordinate(0.0, 10.0))
    just_south = to_utm(GeographicCoordinate(-1e-9, 10.0))

    assert on_equator.hemisphere is Hemisphere.NORTHERN
    assert just_south.hemisphere is Hemisphere.SOUTHERN
    assert just_south.northing == pytest.approx(10_000_000, abs=1e-3)


def test_underflowing_southern_latitude_keeps_false_northing():
    point = to_utm(GeographicCoordinate(-1e-322, 10.0))

    assert point.hemisphere is Hemisphere.SOUTHERN
    assert point.northing == pytest.approx(10_000_000, abs=1e-6)

    recovered = to_geographic(point)
    assert recovered.latitude == pytest.approx(0.0, abs=1e-9)
    assert recovered.longitude == pytest.approx(10.0, abs=1e-9)


def test_reference_point_inverts_to_published_coordinate(reference_coordinate, reference_point):
    coordinate = to_geographic(reference_point)

    assert coordinate.latitude == pytest.approx(reference_coordinate.latitude, abs=2e-5)
    assert coordinate.longitude == pytest.approx(reference_coordinate.longitude, abs=2e-5)


def test_antimeridian_belongs_to_zone_one():
    east = to_utm(GeographicCoordinate(10.0, 180.0))
    west = to_utm(GeographicCoordinate(10.0, -180.0))

    assert east.zone == west.zone == 1
    assert east.easting == pytest.approx(west.easting, abs=1e-6)
    assert east.northing == pytest.approx(west.northing, abs=1e-6)


def test_norway_point_projects_into_zone_32():
    point = to_utm(GeographicCoordinate(61.042865, 4.684059))
    assert point.zone == 32
    # West of zone 32's central meridian
    assert point.easting < 500000.0


@pytest.mark.parametrize("latitude", [84.5, -84.5, 90.0])
def test_forward_rejects_latitudes_beyond_84(latitude):
    with pytest.raises(OutOfDomainError):
        to_utm(GeographicCoordinate(latitude, 0.0))


@pytest.mark.parametrize("latitude", [84.0, -84.0])
def test_forward_accepts_domain_edges(latitude):
    point = to_utm(GeographicCoordinate(latitude, 0.0))
    assert point.hemisphere is Hemisphere.from_latitude(latitude)


@pytest.mark.parametrize("latitude, longitude", ROUND_TRIP_COORDINATES)
def test_round_trip(latitude, longitude):
    coordinate = GeographicCoordinate(latitude, longitude)
    recovered = to_geographic(to_utm(coordinate))

    assert recovered.latitude == pytest.approx(latitude, abs=5e-4)
    assert recovered.longitude == pytest.approx(longitude, abs=5e-4)
    # The series pair is far more accurate than the tolerance above
    assert recovered.latitude == pytest.approx(latitude, abs=1e-9)
    assert recovered.longitude == pytest.approx(longitude, abs=1e-9)


@pytest.mark.parametrize(
    "point",
    [
        UTMPoint(400000.0, 5000000.0, 10, Hemisphere.NORTHERN),
        UTMPoint(600000.0, 7000000.0, 33, Hemisphere.SOUTHERN),
        UTMPoint(300000.0, 1000000.0, 1, Hemisphere.NORTHERN),
        UTMPoint(700000.0, 9000000.0, 60, Hemisphere.SOUTHERN),
        UTMPoint(450000.0, 6800000.0, 31, Hemisphere.NORTHERN),
    ],
)
def test_reverse_round_trip(point):
    again = to_utm(to_geographic(point))

    assert again.zone == point.zone
    assert again.hemisphere is point.hemisphere
    assert again.easting == pytest.approx(point.easting, abs=0.5)
    assert again.northing == pytest.approx(point.northing, abs=0.5)


def test_inverse_normalizes_longitude_across_antimeridian():
    point = to_utm(GeographicCoordinate(10.0, 180.0))
    coordinate = to_geographic(point)

    assert -180.0 <= coordinate.longitude <= 180.0
    assert abs(coordinate.longitude) == pytest.approx(180.0, abs=1e-9)


class TestConformalLatitude:
    def test_equator_is_fixed_point(self):
        assert conformal_tau(0.0, WGS84.eccentricity) == 0.0

    def test_conformal_latitude_is_smaller_in_magnitude(self):
        tau = math.tan(math.radians(45.0))
        tau_prime = conformal_tau(tau, WGS84.eccentricity)
        assert 0 < tau_prime < tau

    def test_sphere_leaves_latitude_unchanged(self):
        assert conformal_tau(0.75, 0.0) == pytest.approx(0.75)

    def test_newton_solve_inverts_conformal_map(self):
        tau = math.tan(math.radians(-52.3))
        tau_prime = conformal_tau(tau, WGS84.eccentricity)
        assert solve_tau(tau_prime, WGS84.eccentricity) == pytest.approx(tau, rel=1e-12)

    def test_vectorized_conformal_map_matches_scalar(self):
        taus = np.tan(np.radians([-80.0, -10.0, 0.0, 35.0, 84.0]))
        expected = [conformal_tau(float(t), WGS84.eccentricity) for t in taus]
        np.testing.assert_allclose(conformal_tau(taus, WGS84.eccentricity), expected, rtol=1e-13)


class TestInverseConvergence:
    def test_iteration_bound_raises_convergence_error(self):
        point = UTMPoint(500000.0, 5000000.0, 31, Hemisphere.NORTHERN)
        solver = InverseSolverConfig(max_iterations=1)

        with pytest.raises(ConvergenceError) as excinfo:
            to_geographic(point, solver=solver)

        assert excinfo.value.iterations == 1
        assert excinfo.value.last_step > solver.tolerance

    def test_non_finite_input_raises_instead_of_returning_nan(self):
        point = UTMPoint(float("nan"), 5000000.0, 31, Hemisphere.NORTHERN)

        with pytest.raises(ConvergenceError):
            to_geographic(point)

    def test_equator_converges_immediately(self):
        point = UTMPoint(500000.0, 0.0, 31, Hemisphere.NORTHERN)
        coordinate = to_geographic(point, solver=InverseSolverConfig(max_iterations=1))
        assert coordinate.latitude == 0.0
        assert coordinate.longitude == pytest.approx(3.0)

    @pytest.mark.parametrize(
        "kwargs",
        [{"tolerance": 0.0}, {"tolerance": -1e-9}, {"max_iterations": 0}],
    )
    def test_invalid_solver_settings(self, kwargs):
        with pytest.raises(ValueError):
            InverseSolverConfig(**kwargs)


class TestUTMConverter:
    def test_default_converter_matches_module_functions(self, converter, reference_coordinate):
        assert converter.to_utm(reference_coordinate) == to_utm(reference_coordinate)

    @pytest.mark.parametrize("ellipsoid", [GRS80, INTERNATIONAL_1924])
    def test_round_trip_on_other_ellipsoids(self, ellipsoid, reference_coordinate):
        converter = UTMConverter(ellipsoid=ellipsoid)
        recovered = converter.to_geographic(converter.to_utm(reference_coordinate))

        assert recovered.latitude == pytest.approx(reference_coordinate.latitude, abs=1e-9)
        assert recovered.longitude == pytest.approx(reference_coordinate.longitude, abs=1e-9)

    def test_ellipsoid_changes_the_projection(self, reference_coordinate):
        wgs84 = UTMConverter().to_utm(reference_coordinate)
        hayford = UTMConverter(ellipsoid=INTERNATIONAL_1924).to_utm(reference_coordinate)
        assert (wgs84 - hayford).magnitude > 10.0

    def test_converter_uses_its_solver(self):
        converter = UTMConverter(solver=InverseSolverConfig(max_iterations=1))
        with pytest.raises(ConvergenceError):
            converter.to_geographic(UTMPoint(500000.0, 5000000.0, 31, Hemisphere.NORTHERN))

    def test_converter_is_immutable(self, converter):
        with pytest.raises(dataclasses.FrozenInstanceError):
            converter.ellipsoid = GRS80
