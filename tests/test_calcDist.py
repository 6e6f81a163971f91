# tests/test_calcDist.py
import pytest

from calcDist import bearing, haversine_mi
from config import EARTH_RADIUS_M, METERS_PER_MILE


def test_one_degree_of_latitude():
    assert haversine_mi(0.0, 0.0, 0.0, 1.0) == pytest.approx(69.09, abs=0.01)


def test_miles_use_the_same_sphere_as_osm_meters():
    # 111195.08 m is one degree of arc on a 6371009 m sphere
    one_degree_m = EARTH_RADIUS_M * 3.141592653589793 / 180.0
    assert one_degree_m == pytest.approx(111195.08, abs=0.01)
    assert haversine_mi(0.0, 0.0, 0.0, 1.0) * METERS_PER_MILE == pytest.approx(one_degree_m)


def test_same_point_is_zero():
    assert haversine_mi(10.0, 20.0, 10.0, 20.0) == 0.0


def test_distance_is_symmetric():
    assert haversine_mi(-122.26, 37.87, -122.25, 37.86) == pytest.approx(
        haversine_mi(-122.25, 37.86, -122.26, 37.87))


@pytest.mark.parametrize("dest, expected", [
    ((0.0, 1.0), 0.0),
    ((1.0, 0.0), 90.0),
    ((0.0, -1.0), 180.0),
    ((-1.0, 0.0), -90.0),
])
def test_bearing_cardinal_points(dest, expected):
    assert abs(bearing(0.0, 0.0, *dest)) == pytest.approx(abs(expected))
    if expected not in (0.0, 180.0):
        assert bearing(0.0, 0.0, *dest) == pytest.approx(expected)
