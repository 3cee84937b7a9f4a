# backend/ritto/services/slots/generator.py
"""
Slot generation for a business on a specific date.

Produces the ordered list of candidate start times and the capacity of the
window each one came from.

Contains:
✓ weekly schedule windows of the weekday
✓ exception dates (a blocked date has no slots at all)
✓ effective interval = max(default interval, service duration)

Does NOT contain:
✗ Bookings (applied by annotate_slots, always read fresh)

Policy: a slot that starts before the window end is emitted even if the
service would run past the end. Slots are never clipped to the window.
"""

import logging
from datetime import date

from redis import Redis
from sqlalchemy.orm import Session

from ...models import Business, Service
from ..exception_calendar import is_blocked
from ..ledger import consumed_by_slot
from ..schedule import entries_for
from .config import DEFAULT_INTERVAL, weekday_name
from .redis_store import SlotsRedisStore
from .timegrid import from_minutes, to_minutes
from .types import SlotAvailability, SlotCandidate

logger = logging.getLogger(__name__)


def effective_interval(business: Business, service: Service | None = None) -> int:
    default = business.slot_interval_minutes or DEFAULT_INTERVAL
    if service is None:
        return default
    return max(default, service.duration)


def calculate_day_slots(
    db: Session,
    business_id: int,
    target_date: date,
    interval: int,
) -> list[SlotCandidate]:
    """
    Expand the weekday's windows into fixed-width slots.

    Returns:
        SlotCandidates sorted by start time. Empty list = no slots.
    """
    # Step 1: Exception dates win over everything
    if is_blocked(db, business_id, target_date):
        return []

    # Step 2: Windows for the weekday
    entries = entries_for(db, business_id, weekday_name(target_date))
    if not entries:
        return []

    # Step 3: Walk each window in minutes so the loop can never wrap past midnight
    slots: list[SlotCandidate] = []
    for entry in entries:
        t = to_minutes(entry.start_time)
        end_min = to_minutes(entry.end_time)
        while t < end_min:
            slots.append(SlotCandidate(start=from_minutes(t), capacity=entry.capacity_per_slot))
            t += interval

    # Windows on one weekday never overlap, so start times are unique
    slots.sort()
    return slots


def generate_slots(
    db: Session,
    business: Business,
    target_date: date,
    service: Service | None = None,
    redis: Redis | None = None,
) -> list[SlotCandidate]:
    """Raw slot grid for a date, served from Redis when a client is given."""
    interval = effective_interval(business, service)

    if redis is None:
        return calculate_day_slots(db, business.id, target_date, interval)

    store = SlotsRedisStore(redis)
    # Generation must be read before the schedule, see redis_store
    generation = store.generation(business.id, target_date)
    if generation is None:
        return calculate_day_slots(db, business.id, target_date, interval)

    cached = store.get_grid(business.id, target_date, interval, generation)
    if cached is not None:
        return cached

    slots = calculate_day_slots(db, business.id, target_date, interval)
    store.store_grid(business.id, target_date, interval, generation, slots)
    return slots


def annotate_slots(
    db: Session,
    business_id: int,
    target_date: date,
    slots: list[SlotCandidate],
) -> list[SlotAvailability]:
    consumed = consumed_by_slot(db, business_id, target_date)
    return [
        SlotAvailability(
            start=slot.start,
            capacity=slot.capacity,
            consumed=consumed.get(slot.start, 0),
        )
        for slot in slots
    ]


def get_available_slots(
    db: Session,
    business: Business,
    service: Service,
    target_date: date,
    redis: Redis | None = None,
    include_full: bool = False,
) -> list[SlotAvailability]:
    """
    Slots for a service on a date with their remaining capacity.

    Full slots are dropped unless ``include_full`` is set.
    """
    slots = generate_slots(db, business, target_date, service, redis)
    annotated = annotate_slots(db, business.id, target_date, slots)
    if include_full:
        return annotated
    return [slot for slot in annotated if slot.bookable]
