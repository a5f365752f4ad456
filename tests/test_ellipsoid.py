import dataclasses

import pytest

from common.constants import GeodeticConstants
from geotum.ellipsoid import (
    CLARKE_1866,
    GRS80,
    INTERNATIONAL_1924,
    KNOWN_ELLIPSOIDS,
    WGS84,
    Ellipsoid,
)


def test_wgs84_radii():
    assert WGS84.equatorial_radius == 6378137.0
    assert WGS84.polar_radius == 6356752.3
    assert WGS84.name == "WGS84"


def test_wgs84_derived_parameters():
    assert WGS84.flattening == pytest.approx((6378137.0 - 6356752.3) / 6378137.0)
    assert WGS84.inverse_flattening == pytest.approx(298.257, abs=0.01)
    assert WGS84.eccentricity == pytest.approx(0.0818191908, rel=1e-6)
    assert WGS84.eccentricity_squared == pytest.approx(WGS84.eccentricity ** 2)


def test_third_flattening_matches_radii_ratio():
    a, b = WGS84.equatorial_radius, WGS84.polar_radius
    assert WGS84.third_flattening == pytest.approx((a - b) / (a + b), rel=1e-12)


def test_constructors_agree_on_eccentricity():
    a, b = 6378137.0, 6356752.3
    from_radii = Ellipsoid(a, b)
    from_flattening = Ellipsoid.from_inverse_flattening(a, a / (a - b))

    assert from_flattening.polar_radius == pytest.approx(b, abs=1e-6)
    assert from_flattening.eccentricity == pytest.approx(from_radii.eccentricity, rel=1e-12)


def test_grs80_polar_radius():
    assert GRS80.polar_radius == pytest.approx(6356752.3141, abs=1e-3)


@pytest.mark.parametrize("ellipsoid", [WGS84, GRS80, INTERNATIONAL_1924, CLARKE_1866])
def test_known_ellipsoids_are_oblate(ellipsoid):
    assert 0 < ellipsoid.polar_radius < ellipsoid.equatorial_radius
    assert 0 < ellipsoid.eccentricity < 1
    assert KNOWN_ELLIPSOIDS[ellipsoid.name] is ellipsoid


def test_ellipsoid_is_immutable_and_hashable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        WGS84.polar_radius = 0.0
    assert {WGS84: "default"}[Ellipsoid(6378137.0, 6356752.3, name="WGS84")] == "default"


@pytest.mark.parametrize(
    "equatorial, polar",
    [(0.0, -1.0), (6378137.0, 6378137.0), (6378137.0, 6400000.0), (6378137.0, 0.0)],
)
def test_invalid_radii(equatorial, polar):
    with pytest.raises(ValueError):
        Ellipsoid(equatorial, polar)


def test_wgs84_matches_published_inverse_flattening():
    rf = GeodeticConstants.WGS84_INVERSE_FLATTENING.value
    exact = Ellipsoid.from_inverse_flattening(WGS84.equatorial_radius, rf)

    assert exact.polar_radius == pytest.approx(WGS84.polar_radius, abs=0.02)
    assert exact.eccentricity == pytest.approx(WGS84.eccentricity, rel=1e-6)
    assert exact.inverse_flattening == pytest.approx(rf, rel=1e-12)
