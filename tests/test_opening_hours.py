import pytest

from itinerary_optimizer.models.domain import TimeWindow
from itinerary_optimizer.services.scheduling.opening_hours import (
    normalize_time_window,
    parse_opening_hours_window,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("09:00-17:30", TimeWindow(540, 1050)),
        ("Mo-Fr 9:00 – 18:00", TimeWindow(540, 1080)),
        ("24/7", TimeWindow(0, 1439)),
        ("Open 24 Hours", TimeWindow(0, 1439)),
        ("22:00-02:00", TimeWindow(0, 1439)),
    ],
)
def test_parse_opening_hours_window(text, expected):
    assert parse_opening_hours_window(text) == expected


@pytest.mark.parametrize("text", [None, "", "   ", "closed on mondays"])
def test_parse_opening_hours_without_range(text):
    assert parse_opening_hours_window(text) is None


def test_normalize_defaults_to_full_day():
    assert normalize_time_window(None) == TimeWindow(0, 1440)
    assert normalize_time_window({}) == TimeWindow(0, 1440)
    assert normalize_time_window({"openMinutes": "9am", "closeMinutes": None}) == TimeWindow(0, 1440)


def test_normalize_clamps_and_reorders():
    assert normalize_time_window({"openMinutes": -30, "closeMinutes": 2000}) == TimeWindow(0, 1440)
    assert normalize_time_window({"openMinutes": 900, "closeMinutes": 600}) == TimeWindow(600, 900)
    assert normalize_time_window({"openMinutes": 600.4, "closeMinutes": 659.5}) == TimeWindow(600, 660)
