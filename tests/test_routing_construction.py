from itinerary_optimizer.models.domain import Waypoint
from itinerary_optimizer.services.routing.construction import nearest_neighbor_order


def _waypoint(wid: str, lat: float, lng: float) -> Waypoint:
    return Waypoint(id=wid, name=f"Stop {wid}", lat=lat, lng=lng)


def _ids(route):
    return [waypoint.id for waypoint in route]


def test_nearest_neighbor_seed_example():
    a, b, c = _waypoint("A", 0, 0), _waypoint("B", 0, 10), _waypoint("C", 0, 1)

    route = nearest_neighbor_order([a, b, c], fixed_start=True, fixed_end=False)

    assert _ids(route) == ["A", "C", "B"]


def test_two_waypoints_returned_unchanged():
    a, b = _waypoint("A", 0, 5), _waypoint("B", 0, 0)
    assert _ids(nearest_neighbor_order([a, b], fixed_start=False, fixed_end=False)) == ["A", "B"]


def test_fixed_end_is_appended_last():
    a = _waypoint("A", 0, 0)
    far_end = _waypoint("E", 0, 1)
    mid = [_waypoint("X", 0, 5), _waypoint("Y", 0, 3), _waypoint("Z", 0, 4)]

    route = nearest_neighbor_order([a, *mid, far_end], fixed_start=True, fixed_end=True)

    assert _ids(route) == ["A", "Y", "Z", "X", "E"]


def test_first_waypoint_seeds_route_even_without_fixed_start():
    waypoints = [_waypoint("A", 0, 9), _waypoint("B", 0, 0), _waypoint("C", 0, 8)]

    route = nearest_neighbor_order(waypoints, fixed_start=False, fixed_end=False)

    assert _ids(route) == ["A", "C", "B"]


def test_distance_ties_go_to_earliest_waypoint():
    waypoints = [
        _waypoint("A", 0, 0),
        _waypoint("B", 0, 1),
        _waypoint("C", 0, -1),
        _waypoint("D", 5, 5),
    ]

    route = nearest_neighbor_order(waypoints, fixed_start=True, fixed_end=False)

    assert _ids(route) == ["A", "B", "C", "D"]


def test_result_is_permutation_of_input():
    waypoints = [_waypoint(str(i), (i * 7) % 5, (i * 3) % 11) for i in range(9)]

    route = nearest_neighbor_order(waypoints, fixed_start=False, fixed_end=True)

    assert sorted(_ids(route)) == sorted(_ids(waypoints))
    assert route[-1] is waypoints[-1]
