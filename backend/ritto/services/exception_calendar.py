"""
Exception calendar: whole-day blocks that override the weekly schedule.

A blocked date has no availability at all, for every service of the business.
"""

import logging
from datetime import date

from redis import Redis
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import CollaboratorUnavailable, NotFound, ValidationError
from ..models import ExceptionDate
from .slots.invalidator import get_affected_dates, invalidate_business_cache

logger = logging.getLogger(__name__)

# Upper bound for a single range insert (one row per day)
MAX_RANGE_DAYS = 366

# A range block can overlap a concurrent one on several days
BLOCK_ATTEMPTS = 3


def is_blocked(db: Session, business_id: int, target_date: date) -> bool:
    return (
        db.query(ExceptionDate.id)
        .filter(
            ExceptionDate.business_id == business_id,
            ExceptionDate.date == target_date,
        )
        .first()
        is not None
    )


def blocked_days(db: Session, business_id: int, start: date, end: date) -> set[date]:
    """Dates of [start, end] that are already blocked."""
    rows = (
        db.query(ExceptionDate.date)
        .filter(
            ExceptionDate.business_id == business_id,
            ExceptionDate.date.between(start, end),
        )
        .all()
    )
    return {day for (day,) in rows}


def list_exceptions(
    db: Session,
    business_id: int,
    date_from: date | None = None,
) -> list[ExceptionDate]:
    query = db.query(ExceptionDate).filter(ExceptionDate.business_id == business_id)
    if date_from is not None:
        query = query.filter(ExceptionDate.date >= date_from)
    return query.order_by(ExceptionDate.date).all()


def block_dates(
    db: Session,
    business_id: int,
    start: date,
    end: date | None = None,
    reason: str | None = None,
    redis: Redis | None = None,
) -> list[ExceptionDate]:
    """
    Block a single date, or every day of [start, end] inclusive.

    Days that are already blocked are left as they are.

    Returns:
        Newly created rows.
    """
    if start is None:
        raise ValidationError("Date is required")
    end = end or start
    if start > end:
        raise ValidationError("Range start must not be after its end")

    days = get_affected_dates(start, end)
    if len(days) > MAX_RANGE_DAYS:
        raise ValidationError(f"A range may span at most {MAX_RANGE_DAYS} days")

    reason = reason.strip() if reason and reason.strip() else None

    # Each IntegrityError means a concurrent block committed some of these days
    for _ in range(BLOCK_ATTEMPTS):
        already = blocked_days(db, business_id, start, end)
        rows = [
            ExceptionDate(business_id=business_id, date=day, reason=reason)
            for day in days
            if day not in already
        ]
        db.add_all(rows)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(
                f"Block race lost: business_id={business_id}, "
                f"range={start.isoformat()}..{end.isoformat()}"
            )
            continue
        break
    else:
        raise CollaboratorUnavailable("Exception dates are being modified concurrently, retry")

    for row in rows:
        db.refresh(row)

    invalidate_business_cache(redis, business_id, days)

    logger.info(
        f"Dates blocked: business_id={business_id}, "
        f"range={start.isoformat()}..{end.isoformat()}, new={len(rows)}"
    )
    return rows


def unblock_date(
    db: Session,
    business_id: int,
    exception_id: int,
    redis: Redis | None = None,
) -> None:
    row = db.get(ExceptionDate, exception_id)
    if not row or row.business_id != business_id:
        raise NotFound("Exception date not found")

    blocked_day = row.date
    db.delete(row)
    db.commit()
    invalidate_business_cache(redis, business_id, [blocked_day])
