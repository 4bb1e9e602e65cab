import pytest

from banda_delivery.models.domain import Coordinates
from banda_delivery.services.geospatial import distance_between, haversine_km


def test_haversine_one_degree_of_longitude_on_equator():
    assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(111.195, abs=0.01)


def test_haversine_is_symmetric_and_zero_for_identical_points():
    pairs = [
        ((-1.2921, 36.8219), (-0.3031, 36.0800)),
        ((0.5143, 35.2698), (-4.0435, 39.6682)),
        ((10.0, -20.0), (-10.0, 20.0)),
    ]
    for (lat1, lng1), (lat2, lng2) in pairs:
        assert haversine_km(lat1, lng1, lat2, lng2) == haversine_km(lat2, lng2, lat1, lng1)
        assert haversine_km(lat1, lng1, lat1, lng1) == 0


def test_distance_between_nairobi_and_nakuru():
    nairobi = Coordinates(lat=-1.2921, lng=36.8219)
    nakuru = Coordinates(lat=-0.3031, lng=36.0800)
    assert 120 < distance_between(nairobi, nakuru) < 140
