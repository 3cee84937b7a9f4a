"""
Weekly schedule store and overlap validation.

Recurring windows are keyed by weekday. A batch of new windows (same
start/end/capacity on several weekdays) is accepted or rejected as a whole:
if any candidate overlaps an existing window on its weekday, nothing is
written.

Concurrent "add schedule" calls for the same (business, weekday) are
serialized by bumping the matching ``schedule_guards`` row *before* reading
existing windows, inside the same transaction as the insert. On PostgreSQL
that is a row lock; on SQLite it takes the database write lock.
"""

import logging
from datetime import time

from redis import Redis
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import (
    BookingEngineError,
    CollaboratorUnavailable,
    NotFound,
    OverlapError,
    ValidationError,
)
from ..models import Business, ScheduleGuard, WeeklyScheduleEntry
from .slots.config import WEEKDAYS, get_slot_config, weekday_index
from .slots.invalidator import invalidate_business_cache
from .slots.timegrid import ensure_minute_grid, overlaps

logger = logging.getLogger(__name__)

# A guard row insert can lose a race against a concurrent first insert once
GUARD_ATTEMPTS = 2


def entries_for(db: Session, business_id: int, weekday: str) -> list[WeeklyScheduleEntry]:
    """Windows for one weekday, ordered by start time."""
    return (
        db.query(WeeklyScheduleEntry)
        .filter(
            WeeklyScheduleEntry.business_id == business_id,
            WeeklyScheduleEntry.weekday == weekday,
        )
        .order_by(WeeklyScheduleEntry.start_time)
        .all()
    )


def list_schedules(db: Session, business_id: int) -> list[WeeklyScheduleEntry]:
    """All windows of a business, Monday first, then by start time."""
    entries = (
        db.query(WeeklyScheduleEntry)
        .filter(WeeklyScheduleEntry.business_id == business_id)
        .all()
    )
    return sorted(entries, key=lambda e: (weekday_index(e.weekday), e.start_time))


def find_overlap(
    candidates: dict[str, tuple[time, time]],
    existing: dict[str, list[WeeklyScheduleEntry]],
) -> str | None:
    """
    Return the first weekday whose candidate window collides with an
    existing one, or None when the whole batch is clear.
    """
    for weekday in sorted(candidates, key=weekday_index):
        start, end = candidates[weekday]
        for entry in existing.get(weekday, []):
            if overlaps(start, end, entry.start_time, entry.end_time):
                return weekday
    return None


def _normalize_weekdays(weekdays: list[str]) -> list[str]:
    if not weekdays:
        raise ValidationError("Select at least one weekday")

    days: list[str] = []
    for raw in weekdays:
        day = raw.strip().lower()
        if day not in WEEKDAYS:
            raise ValidationError(f"Unknown weekday: {raw!r}")
        if day not in days:
            days.append(day)

    # Lock order must be stable across callers
    return sorted(days, key=weekday_index)


def _validate_window(start: time, end: time, capacity: int) -> tuple[time, time]:
    start = ensure_minute_grid(start)
    end = ensure_minute_grid(end)
    if start >= end:
        raise ValidationError("Window start must be before its end")

    max_capacity = get_slot_config().max_capacity
    if capacity < 1 or capacity > max_capacity:
        raise ValidationError(f"capacity_per_slot must be between 1 and {max_capacity}")
    return start, end


def _lock_weekday(db: Session, business_id: int, weekday: str) -> None:
    result = db.execute(
        update(ScheduleGuard)
        .where(
            ScheduleGuard.business_id == business_id,
            ScheduleGuard.weekday == weekday,
        )
        .values(version=ScheduleGuard.version + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.add(ScheduleGuard(business_id=business_id, weekday=weekday, version=1))
        db.flush()


def add_weekly_schedule(
    db: Session,
    business_id: int,
    weekdays: list[str],
    start: time,
    end: time,
    capacity: int = 1,
    redis: Redis | None = None,
) -> list[WeeklyScheduleEntry]:
    """
    Add the same window on every selected weekday.

    Raises:
        ValidationError: bad window, capacity or weekday list
        OverlapError: a window collides on some weekday (nothing committed)
    """
    days = _normalize_weekdays(weekdays)
    start, end = _validate_window(start, end, capacity)

    if db.get(Business, business_id) is None:
        raise NotFound("Business not found")

    for attempt in range(GUARD_ATTEMPTS):
        try:
            for day in days:
                _lock_weekday(db, business_id, day)

            existing = {day: entries_for(db, business_id, day) for day in days}
            offending = find_overlap({day: (start, end) for day in days}, existing)
            if offending is not None:
                raise OverlapError(offending)

            rows = [
                WeeklyScheduleEntry(
                    business_id=business_id,
                    weekday=day,
                    start_time=start,
                    end_time=end,
                    capacity_per_slot=capacity,
                )
                for day in days
            ]
            db.add_all(rows)
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            if attempt == GUARD_ATTEMPTS - 1:
                raise CollaboratorUnavailable("Schedule is being modified concurrently, retry")
        except BookingEngineError:
            db.rollback()
            raise

    for row in rows:
        db.refresh(row)

    invalidate_business_cache(redis, business_id)

    logger.info(
        f"Schedule added: business_id={business_id}, days={days}, "
        f"window={start.isoformat()}-{end.isoformat()}, capacity={capacity}"
    )
    return rows


def remove_schedule(
    db: Session,
    business_id: int,
    entry_id: int,
    redis: Redis | None = None,
) -> None:
    entry = db.get(WeeklyScheduleEntry, entry_id)
    if not entry or entry.business_id != business_id:
        raise NotFound("Schedule entry not found")

    db.delete(entry)
    db.commit()
    invalidate_business_cache(redis, business_id)
