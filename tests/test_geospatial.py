import math

import pytest

from itinerary_optimizer.models.domain import TravelMode, Waypoint, round_half_up
from itinerary_optimizer.services.geospatial import haversine_km, route_distance_km, waypoint_distance_km
from itinerary_optimizer.services.routing.travel import estimate_leg_minutes


def _waypoint(wid: str, lat: float, lng: float) -> Waypoint:
    return Waypoint(id=wid, name=f"Stop {wid}", lat=lat, lng=lng)


def test_haversine_one_degree_on_equator():
    assert haversine_km(0, 0, 0, 1) == pytest.approx(111.195, abs=0.01)


def test_haversine_is_symmetric_and_zero_for_same_point():
    a = _waypoint("a", 48.8566, 2.3522)
    b = _waypoint("b", 51.5074, -0.1278)
    assert waypoint_distance_km(a, b) == pytest.approx(waypoint_distance_km(b, a))
    assert waypoint_distance_km(a, a) == 0
    assert waypoint_distance_km(a, b) == pytest.approx(343.5, abs=1.0)


def test_route_distance_sums_consecutive_legs():
    route = [_waypoint("a", 0, 0), _waypoint("b", 0, 1), _waypoint("c", 0, 3)]
    assert route_distance_km(route) == pytest.approx(haversine_km(0, 0, 0, 3))
    assert route_distance_km(route[:1]) == 0


def test_leg_minutes_follow_travel_mode_speed():
    # 1000 km apart along the equator
    a = _waypoint("a", 0, 0)
    b = _waypoint("b", 0, math.degrees(1000 / 6371))

    assert estimate_leg_minutes(a, b, TravelMode.DRIVING) == 1000
    assert estimate_leg_minutes(a, b, TravelMode.WALKING) == 12000
    assert estimate_leg_minutes(a, b, TravelMode.CYCLING) == 3333


def test_leg_minutes_never_below_one():
    a = _waypoint("a", 10, 10)
    assert estimate_leg_minutes(a, a, TravelMode.DRIVING) == 1


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
