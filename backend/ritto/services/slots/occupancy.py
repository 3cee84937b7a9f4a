"""
Daily occupancy.

total = sum of capacity over the day's grid at the business default interval
used  = confirmed bookings on the date
occupancy = round(used / total * 100), 0 for a day without slots
"""

from datetime import date

from redis import Redis
from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Booking, Business
from ...utils import round_half_up
from ..ledger import CONFIRMED
from .generator import generate_slots


def total_slot_capacity(
    db: Session,
    business: Business,
    target_date: date,
    redis: Redis | None = None,
) -> int:
    slots = generate_slots(db, business, target_date, service=None, redis=redis)
    return sum(slot.capacity for slot in slots)


def confirmed_count(db: Session, business_id: int, target_date: date) -> int:
    return (
        db.query(func.count(Booking.id))
        .filter(
            Booking.business_id == business_id,
            Booking.date == target_date,
            Booking.status == CONFIRMED,
        )
        .scalar()
    )


def get_occupancy(
    db: Session,
    business: Business,
    target_date: date,
    redis: Redis | None = None,
) -> int:
    """Occupancy percentage for a date."""
    total = total_slot_capacity(db, business, target_date, redis)
    if total == 0:
        return 0
    used = confirmed_count(db, business.id, target_date)
    return round_half_up(used * 100 / total)
