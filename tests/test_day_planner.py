from itinerary_optimizer.models.domain import PlannerConstraints, TimeWindow, TravelMode, Waypoint
from itinerary_optimizer.services.scheduling.day_planner import fit_visit, plan_days


def _waypoint(wid: str, lat: float, lng: float, order: int | None = None) -> Waypoint:
    return Waypoint(id=wid, name=f"Stop {wid}", lat=lat, lng=lng, order=order)


def _constraints(**overrides) -> PlannerConstraints:
    values = {"day_start_minutes": 540, "day_end_minutes": 1200, "default_visit_minutes": 60}
    values.update(overrides)
    return PlannerConstraints(**values)


def test_visit_waits_for_opening_and_fits_before_close():
    stop = _waypoint("museum", 0, 0)
    constraints = _constraints(
        visit_minutes_by_waypoint_id={"museum": 90},
        time_windows_by_waypoint_id={"museum": TimeWindow(open_minutes=600, close_minutes=720)},
    )

    fit = fit_visit(stop, 540, constraints)
    result = plan_days([stop], constraints)

    assert fit.fits
    assert (fit.visit_start, fit.visit_end) == (600, 690)
    assert result.conflicts == []
    assert result.days[0].stops[0].visit_end_minutes == 690


def test_visit_running_past_closing_is_a_conflict_but_still_placed():
    stop = _waypoint("gallery", 0, 0)
    constraints = _constraints(
        visit_minutes_by_waypoint_id={"gallery": 90},
        time_windows_by_waypoint_id={"gallery": TimeWindow(open_minutes=600, close_minutes=660)},
    )

    result = plan_days([stop], constraints)

    assert len(result.days) == 1
    assert result.days[0].waypoint_indexes == [0]
    assert result.days[0].stops[0].visit_start_minutes == 600
    assert [c.waypoint_id for c in result.conflicts] == ["gallery"]
    assert "Stop gallery" in result.conflicts[0].message


def test_travel_accumulates_within_a_day():
    waypoints = [_waypoint("a", 0, 0), _waypoint("b", 0, 0.1)]

    result = plan_days(waypoints, _constraints())

    assert len(result.days) == 1
    day = result.days[0]
    assert day.waypoint_indexes == [0, 1]
    assert day.estimated_travel_minutes == 11
    assert day.stops[1].arrival_minutes == 540 + 60 + 11
    assert day.stops[1].leg_minutes == 11


def test_overflow_opens_new_day_and_keeps_rejected_leg_on_closed_day():
    waypoints = [_waypoint("a", 0, 0), _waypoint("b", 0, 0)]
    constraints = _constraints(
        visit_minutes_by_waypoint_id={"a": 160, "b": 60},
        time_windows_by_waypoint_id={"b": TimeWindow(open_minutes=0, close_minutes=600)},
    )

    result = plan_days(waypoints, constraints)

    assert [(d.day, d.waypoint_indexes) for d in result.days] == [(1, [0]), (2, [1])]
    assert result.days[0].estimated_travel_minutes == 1
    assert result.days[1].estimated_travel_minutes == 0
    assert result.days[1].stops[0].arrival_minutes == 540
    assert result.conflicts == []


def test_stop_that_never_fits_is_kept_on_the_new_day():
    waypoints = [_waypoint("a", 0, 0), _waypoint("b", 0, 0)]
    constraints = _constraints(
        visit_minutes_by_waypoint_id={"a": 160, "b": 90},
        time_windows_by_waypoint_id={"b": TimeWindow(open_minutes=0, close_minutes=600)},
    )

    result = plan_days(waypoints, constraints)

    assert [d.waypoint_indexes for d in result.days] == [[0], [1]]
    assert [c.waypoint_id for c in result.conflicts] == ["b"]
    assert [stop.conflict for day in result.days for stop in day.stops] == [False, True]


def test_days_partition_the_route():
    waypoints = [_waypoint(str(i), 0, i * 0.05) for i in range(12)]
    constraints = _constraints(travel_mode=TravelMode.WALKING, default_visit_minutes=120)

    result = plan_days(waypoints, constraints)

    assert len(result.days) > 1
    assert [d.day for d in result.days] == list(range(1, len(result.days) + 1))
    flattened = [idx for day in result.days for idx in day.waypoint_indexes]
    assert flattened == list(range(len(waypoints)))
    assert all(day.estimated_travel_minutes >= 0 for day in result.days)


def test_short_day_is_stretched_to_thirty_minutes():
    constraints = _constraints(day_start_minutes=600, day_end_minutes=610)
    assert constraints.effective_day_end_minutes == 630

    result = plan_days([_waypoint("a", 0, 0)], _constraints(day_start_minutes=600, day_end_minutes=610, default_visit_minutes=30))
    assert result.conflicts == []


def test_empty_route_has_no_days():
    result = plan_days([], _constraints())
    assert result.days == []
    assert result.conflicts == []
