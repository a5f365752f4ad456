import pytest
from pyproj import CRS

from common.types import GeographicCoordinate, Hemisphere, UTMPoint
from geotum.crs import ProjReferenceTransformer, utm_crs, utm_epsg_code
from geotum.transverse_mercator import to_geographic, to_utm


@pytest.mark.parametrize(
    "zone, hemisphere, code",
    [
        (10, Hemisphere.NORTHERN, 32610),
        (56, Hemisphere.SOUTHERN, 32756),
        (1, Hemisphere.NORTHERN, 32601),
        (60, Hemisphere.SOUTHERN, 32760),
    ],
)
def test_utm_epsg_code(zone, hemisphere, code):
    assert utm_epsg_code(zone, hemisphere) == code


@pytest.mark.parametrize("zone", [0, 61])
def test_utm_epsg_code_rejects_invalid_zone(zone):
    with pytest.raises(ValueError):
        utm_epsg_code(zone, Hemisphere.NORTHERN)


def test_utm_crs():
    crs = utm_crs(33, Hemisphere.NORTHERN)
    assert isinstance(crs, CRS)
    assert crs.to_epsg() == 32633
    assert crs.is_projected


@pytest.mark.parametrize(
    "latitude, longitude",
    [
        (37.0837, -121.9981),
        (-33.8568, 151.2153),
        (61.042865, 4.684059),
        (78.0, 20.0),
        (-70.0, -60.5),
        (0.5, 0.5),
    ],
)
def test_forward_agrees_with_proj(latitude, longitude):
    coordinate = GeographicCoordinate(latitude, longitude)
    ours = to_utm(coordinate)
    theirs = ProjReferenceTransformer(ours.zone, ours.hemisphere).to_utm(coordinate)

    assert (ours - theirs).magnitude < 0.1


def test_inverse_agrees_with_proj():
    point = UTMPoint(612345.0, 5432100.0, 33, Hemisphere.NORTHERN)
    ours = to_geographic(point)
    theirs = ProjReferenceTransformer(33, Hemisphere.NORTHERN).to_geographic(point)

    assert ours.latitude == pytest.approx(theirs.latitude, abs=1e-6)
    assert ours.longitude == pytest.approx(theirs.longitude, abs=1e-6)


def test_transformer_rejects_foreign_zone():
    transformer = ProjReferenceTransformer(10, Hemisphere.NORTHERN)
    assert transformer.epsg_code == 32610
    assert "10N" in transformer.name

    with pytest.raises(ValueError):
        transformer.to_geographic(UTMPoint(500000.0, 0.0, 11, Hemisphere.NORTHERN))
