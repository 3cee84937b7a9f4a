"""
Public booking submission.

Steps:
1. Business exists and is allowed to accept bookings
2. Service belongs to the business and is active
3. Date/customer fields are valid
4. Slot is one of the day's generated slots (schedule read fresh, no cache)
5. Ledger insert with status per deposit policy
6. Deposit checkout (processor) when no transfer receipt was attached
7. Notification event (never rolls the booking back)
"""

import logging
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal

from sqlalchemy.orm import Session

from ..errors import BookingClosed, CollaboratorUnavailable, NotFound, SlotUnavailable, ValidationError
from ..models import Booking, Business, Service
from .deposit import required_deposit
from .events import EventEmitter, booking_event_payload
from .ledger import CONFIRMED, BookingDraft, create_booking
from .payments import PaymentGateway, attach_payment
from .slots.generator import generate_slots
from .slots.timegrid import ensure_minute_grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Customer:
    name: str
    email: str
    phone: str


@dataclass
class BookingResult:
    booking: Booking
    deposit_amount: Decimal
    redirect_url: str | None = None


def get_public_business(db: Session, slug_or_id: str) -> Business:
    """Resolve a business from its public slug or numeric id."""
    business = db.query(Business).filter(Business.slug == slug_or_id).first()
    if business is None and str(slug_or_id).isdigit():
        business = db.get(Business, int(slug_or_id))
    if business is None:
        raise NotFound("Business not found")
    return business


def get_active_service(db: Session, business_id: int, service_id: int) -> Service:
    service = db.get(Service, service_id)
    if not service or service.business_id != business_id or not service.is_active:
        raise NotFound("Service not found or inactive")
    return service


def _validate_customer(customer: Customer) -> Customer:
    name, email, phone = customer.name.strip(), customer.email.strip(), customer.phone.strip()
    if not name or not email or not phone:
        raise ValidationError("Customer name, email and phone are required")
    if "@" not in email:
        raise ValidationError("Customer email is invalid")
    return Customer(name=name, email=email, phone=phone)


def submit_booking(
    db: Session,
    business_id: int,
    service_id: int,
    target_date: date,
    slot_start: time,
    customer: Customer,
    receipt_reference: str | None = None,
    notifier: EventEmitter | None = None,
    payments: PaymentGateway | None = None,
    today: date | None = None,
) -> BookingResult:
    """
    Book a slot for a customer.

    Raises:
        NotFound: unknown business or inactive service
        BookingClosed: business is not accepting bookings
        ValidationError: missing date, past date, bad customer data
        SlotUnavailable: slot not offered that day, or already full
    """
    business = db.get(Business, business_id)
    if business is None:
        raise NotFound("Business not found")
    if not business.accepts_bookings:
        raise BookingClosed("This business is not accepting bookings right now")

    service = get_active_service(db, business_id, service_id)

    if target_date is None or slot_start is None:
        raise ValidationError("Date and time are required")
    today = today or date.today()
    if target_date < today:
        raise ValidationError("Date cannot be in the past")
    slot_start = ensure_minute_grid(slot_start)
    customer = _validate_customer(customer)

    slot = next(
        (s for s in generate_slots(db, business, target_date, service) if s.start == slot_start),
        None,
    )
    if slot is None:
        raise SlotUnavailable("This time is not offered on that date")

    deposit = required_deposit(business, service)
    receipt_reference = receipt_reference.strip() if receipt_reference else None

    draft = BookingDraft(
        business_id=business.id,
        service_id=service.id,
        service_name=service.name,
        service_price=service.price,
        date=target_date,
        slot_start=slot_start,
        customer_name=customer.name,
        customer_email=customer.email,
        customer_phone=customer.phone,
        deposit_amount=deposit,
        deposit_receipt_ref=receipt_reference if deposit > 0 else None,
    )
    booking = create_booking(db, draft, capacity=slot.capacity, deposit_required=deposit > 0)
    result = BookingResult(booking=booking, deposit_amount=deposit)

    if deposit > 0 and not receipt_reference and payments is not None:
        try:
            checkout = payments.create_checkout(business, service, deposit, booking.id)
        except CollaboratorUnavailable:
            # Booking stays pending; the owner can still confirm it by hand
            logger.warning(f"Booking {booking.id} left pending without checkout")
        else:
            result.booking = attach_payment(db, booking, checkout)
            result.redirect_url = checkout.redirect_url

    if notifier is not None:
        event = "booking_confirmed" if booking.status == CONFIRMED else "booking_pending"
        notifier.emit(event, booking_event_payload(booking))

    return result
