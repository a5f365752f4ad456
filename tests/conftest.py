import pytest

from common.types import GeographicCoordinate, Hemisphere, UTMPoint
from geotum.transverse_mercator import UTMConverter


@pytest.fixture
def converter():
    return UTMConverter()


@pytest.fixture
def reference_coordinate():
    # Santa Cruz, California
    return GeographicCoordinate(latitude=37.0837, longitude=-121.9981)


@pytest.fixture
def reference_point():
    return UTMPoint(easting=589048.6, northing=4104627.0, zone=10, hemisphere=Hemisphere.NORTHERN)
