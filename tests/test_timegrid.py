from datetime import date, time

import pytest

from ritto.errors import ValidationError
from ritto.services.slots.config import WEEKDAYS, weekday_index, weekday_name
from ritto.services.slots.timegrid import (
    add_minutes,
    ensure_minute_grid,
    format_hhmm,
    from_minutes,
    overlaps,
    parse_hhmm,
    to_minutes,
)
from ritto.utils import round_half_up


def test_minutes_conversion():
    assert to_minutes(time(9, 30)) == 570
    assert from_minutes(570) == time(9, 30)
    assert from_minutes(0) == time(0, 0)


def test_add_minutes_wraps_at_midnight():
    assert add_minutes(time(23, 30), 45) == time(0, 15)
    assert add_minutes(time(9, 0), 30) == time(9, 30)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((time(9, 0), time(10, 0)), (time(9, 30), time(10, 30)), True),
        ((time(9, 0), time(10, 0)), (time(10, 0), time(11, 0)), False),
        ((time(10, 0), time(11, 0)), (time(9, 0), time(10, 0)), False),
        ((time(9, 0), time(12, 0)), (time(10, 0), time(11, 0)), True),
        ((time(9, 0), time(10, 0)), (time(9, 0), time(10, 0)), True),
    ],
)
def test_overlaps_is_half_open(a, b, expected):
    assert overlaps(*a, *b) is expected
    assert overlaps(*b, *a) is expected


def test_parse_and_format_hhmm():
    assert parse_hhmm("09:05") == time(9, 5)
    assert parse_hhmm("14:30:00") == time(14, 30)
    assert format_hhmm(time(9, 5)) == "09:05"


@pytest.mark.parametrize("raw", ["9", "25:00", "10:60", "aa:bb", "10:00:30"])
def test_parse_hhmm_rejects_garbage(raw):
    with pytest.raises(ValidationError):
        parse_hhmm(raw)


def test_ensure_minute_grid_rejects_seconds():
    assert ensure_minute_grid(time(10, 15)) == time(10, 15)
    with pytest.raises(ValidationError):
        ensure_minute_grid(time(10, 15, 30))


def test_weekday_names_are_canonical():
    assert WEEKDAYS[0] == "monday"
    assert weekday_name(date(2030, 6, 3)) == "monday"
    assert weekday_name(date(2030, 6, 9)) == "sunday"
    assert weekday_index("sunday") == 6


@pytest.mark.parametrize(
    "value, expected",
    [(2.5, 3), (0.5, 1), (1.49, 1), (66.66666, 67), (12.5, 13), (0, 0)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
