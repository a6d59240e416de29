# tests/customer_map/domain/test_haversine_utils.py

import pytest

from customer_map.domain.haversine_utils import haversine


def test_haversine_is_symmetric():
    a = (40.7128, -74.0060)
    b = (34.0522, -118.2437)

    assert haversine(a, b) == haversine(b, a)


def test_haversine_zero_for_identical_coordinates():
    assert haversine((39.5, -98.35), (39.5, -98.35)) == 0


def test_haversine_one_degree_of_latitude():
    # 1° ao longo do meridiano = R * pi / 180
    assert haversine((40.0, -100.0), (41.0, -100.0)) == pytest.approx(111.1949, rel=1e-4)


def test_haversine_known_city_pair():
    # Nova York → Los Angeles ~ 3936 km
    assert haversine((40.7128, -74.0060), (34.0522, -118.2437)) == pytest.approx(3936, rel=0.01)


def test_haversine_positive_for_distinct_points():
    assert haversine((0.0, 0.0), (0.0, 0.0001)) > 0


@pytest.mark.parametrize("lat", [0.0, 0.74, 12.5, 45.0, 89.9])
def test_haversine_near_antipodal_points_stay_finite(lat):
    # metade da circunferência = pi * R
    distance = haversine((lat, 0.0), (-lat, 180.0))

    assert distance == pytest.approx(20015.09, rel=1e-4)
