"""
Booking ledger.

Capacity is enforced by the store, not by a read-then-write in the caller:
every booking that consumes capacity holds a ``seat`` in 0..capacity-1 and
(business_id, date, slot_start, seat) is unique. Two concurrent submissions
for the last seat both try to insert the same seat number and only one
commit survives. Bookings that stop consuming capacity (cancelled, no_show)
give their seat back by setting it to NULL.
"""

import logging
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import IllegalTransition, NotFound, SlotUnavailable, ValidationError
from ..models import Booking
from .events import EventEmitter, booking_event_payload

logger = logging.getLogger(__name__)

PENDING = "pending"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"
NO_SHOW = "no_show"

STATUSES = (PENDING, CONFIRMED, CANCELLED, NO_SHOW)

# Statuses whose bookings consume slot capacity
CONSUMING = (PENDING, CONFIRMED)

LEGAL_TRANSITIONS = {
    (PENDING, CONFIRMED),
    (PENDING, CANCELLED),
    (CONFIRMED, NO_SHOW),
    (CONFIRMED, CANCELLED),
}

TERMINAL = (CANCELLED, NO_SHOW)


@dataclass
class BookingDraft:
    business_id: int
    service_id: int
    service_name: str
    service_price: Decimal
    date: date
    slot_start: time
    customer_name: str
    customer_email: str
    customer_phone: str
    deposit_amount: Decimal = Decimal("0")
    deposit_receipt_ref: str | None = None


def consumed_count(db: Session, business_id: int, target_date: date, slot_start: time) -> int:
    """Bookings at exactly (date, slot_start) that still hold capacity."""
    return (
        db.query(func.count(Booking.id))
        .filter(
            Booking.business_id == business_id,
            Booking.date == target_date,
            Booking.slot_start == slot_start,
            Booking.status.in_(CONSUMING),
        )
        .scalar()
    )


def consumed_by_slot(db: Session, business_id: int, target_date: date) -> dict[time, int]:
    """consumed_count for every slot start of a day in one query."""
    rows = (
        db.query(Booking.slot_start, func.count(Booking.id))
        .filter(
            Booking.business_id == business_id,
            Booking.date == target_date,
            Booking.status.in_(CONSUMING),
        )
        .group_by(Booking.slot_start)
        .all()
    )
    return {slot_start: count for slot_start, count in rows}


def _taken_seats(db: Session, business_id: int, target_date: date, slot_start: time) -> set[int]:
    rows = (
        db.query(Booking.seat)
        .filter(
            Booking.business_id == business_id,
            Booking.date == target_date,
            Booking.slot_start == slot_start,
            Booking.seat.isnot(None),
        )
        .all()
    )
    return {seat for (seat,) in rows}


def create_booking(
    db: Session,
    draft: BookingDraft,
    capacity: int,
    deposit_required: bool,
) -> Booking:
    """
    Insert a booking if the slot still has capacity at insertion time.

    Initial status is ``confirmed`` without a deposit and ``pending`` with one.

    Raises:
        SlotUnavailable: every seat of the slot is taken
    """
    if capacity < 1:
        raise ValidationError("Slot capacity must be positive")

    status = PENDING if deposit_required else CONFIRMED

    # Each IntegrityError means a concurrent insert took a seat
    for _ in range(capacity):
        taken = _taken_seats(db, draft.business_id, draft.date, draft.slot_start)
        free = [seat for seat in range(capacity) if seat not in taken]
        if len(taken) >= capacity or not free:
            break

        booking = Booking(
            business_id=draft.business_id,
            service_id=draft.service_id,
            service_name=draft.service_name,
            service_price=draft.service_price,
            date=draft.date,
            slot_start=draft.slot_start,
            seat=free[0],
            customer_name=draft.customer_name,
            customer_email=draft.customer_email,
            customer_phone=draft.customer_phone,
            status=status,
            deposit_amount=draft.deposit_amount,
            deposit_paid=bool(draft.deposit_receipt_ref),
            deposit_receipt_ref=draft.deposit_receipt_ref,
        )
        db.add(booking)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(
                f"Seat race lost: business_id={draft.business_id}, "
                f"slot={draft.date.isoformat()} {draft.slot_start.isoformat()}, seat={free[0]}"
            )
            continue

        db.refresh(booking)
        logger.info(
            f"Booking created: booking_id={booking.id}, business_id={booking.business_id}, "
            f"slot={booking.date.isoformat()} {booking.slot_start.isoformat()}, status={booking.status}"
        )
        return booking

    raise SlotUnavailable("This time is no longer available, choose another one")


def get_booking(db: Session, booking_id: int, business_id: int | None = None) -> Booking:
    booking = db.get(Booking, booking_id)
    if not booking or (business_id is not None and booking.business_id != business_id):
        raise NotFound("Booking not found")
    return booking


def list_bookings(
    db: Session,
    business_id: int,
    target_date: date | None = None,
    status: str | None = None,
) -> list[Booking]:
    query = db.query(Booking).filter(Booking.business_id == business_id)
    if target_date is not None:
        query = query.filter(Booking.date == target_date)
    if status is not None:
        query = query.filter(Booking.status == status)
    return query.order_by(Booking.date, Booking.slot_start, Booking.id).all()


def transition_booking(
    db: Session,
    booking_id: int,
    to_status: str,
    business_id: int | None = None,
    notifier: EventEmitter | None = None,
) -> Booking:
    """
    Move a booking along its lifecycle.

    The update is conditional on the status read, so two owners acting on the
    same booking cannot both succeed.

    Raises:
        IllegalTransition: pair not allowed; current status is preserved
    """
    if to_status not in STATUSES:
        raise ValidationError(f"Unknown status: {to_status!r}")

    booking = get_booking(db, booking_id, business_id)
    current = booking.status

    if (current, to_status) not in LEGAL_TRANSITIONS:
        raise IllegalTransition(current, to_status)

    values = {"status": to_status}
    if to_status in TERMINAL:
        values["seat"] = None

    result = db.execute(
        update(Booking)
        .where(Booking.id == booking_id, Booking.status == current)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        db.refresh(booking)
        raise IllegalTransition(booking.status, to_status)

    db.commit()
    db.refresh(booking)

    logger.info(f"Booking {booking_id} transitioned: {current} → {to_status}")

    if notifier is not None:
        notifier.emit(f"booking_{to_status}", booking_event_payload(booking))

    return booking
