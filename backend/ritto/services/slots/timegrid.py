"""
Time-of-day arithmetic on a minute grid.

Slots never cross midnight, so nothing here tracks date rollover:
``add_minutes`` simply wraps around the 24h clock.
"""

from datetime import time

from ...errors import ValidationError

MINUTES_PER_DAY = 24 * 60


def to_minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def from_minutes(total: int) -> time:
    total %= MINUTES_PER_DAY
    return time(total // 60, total % 60)


def add_minutes(t: time, minutes: int) -> time:
    """Shift a time-of-day by ``minutes``, wrapping within 24 hours."""
    return from_minutes(to_minutes(t) + minutes)


def overlaps(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """
    Half-open interval overlap: [start_a, end_a) vs [start_b, end_b).

    Windows that only touch (end_a == start_b) do not overlap.
    """
    return start_a < end_b and start_b < end_a


def parse_hhmm(value: str) -> time:
    """Parse "HH:MM" (a trailing ":SS" of zeros is tolerated)."""
    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise ValidationError(f"Time must be in HH:MM format, got {value!r}")
    if len(parts) == 3 and int(parts[2]) != 0:
        raise ValidationError(f"Time must be on a minute grid, got {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ValidationError(f"Time out of range: {value!r}")
    return time(hour, minute)


def format_hhmm(t: time) -> str:
    return f"{t.hour:02d}:{t.minute:02d}"


def ensure_minute_grid(t: time) -> time:
    if t.second or t.microsecond:
        raise ValidationError(f"Time must be on a minute grid, got {t.isoformat()}")
    return t.replace(tzinfo=None)
