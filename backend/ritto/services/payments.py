"""
backend/ritto/services/payments.py

Deposit checkout through the payment processor.

Backend → Processor: create a checkout, receive (payment_id, redirect_url)
Processor → Backend: webhook with payment_id once the charge succeeded

Webhook signature verification happens in front of this service.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

import httpx
from sqlalchemy.orm import Session

from ..errors import CollaboratorUnavailable, NotFound
from ..models import Booking, Business, Service
from .events import EventEmitter
from .ledger import CONFIRMED, PENDING, transition_booking

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Checkout:
    payment_id: str
    redirect_url: str


class PaymentGateway:
    """Synchronous client for the processor's checkout API."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        return_url: str = "",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.return_url = return_url
        self.client = client or httpx.Client(
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}"} if api_key else None,
        )

    def close(self) -> None:
        self.client.close()

    def create_checkout(
        self,
        business: Business,
        service: Service,
        amount: Decimal,
        booking_id: int,
    ) -> Checkout:
        """
        Raises:
            CollaboratorUnavailable: processor unreachable or rejected the request
        """
        body = {
            "amount": str(amount),
            "description": f"{business.name} · {service.name}",
            "external_reference": str(booking_id),
            "return_url": f"{self.return_url}/booking-success?booking={booking_id}",
        }
        try:
            resp = self.client.post(f"{self.base_url}/checkouts", json=body)
            resp.raise_for_status()
            data = resp.json()
            return Checkout(payment_id=str(data["id"]), redirect_url=data["url"])
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error(f"Checkout creation failed for booking {booking_id}: {e}")
            raise CollaboratorUnavailable("Payment provider unavailable") from e


def attach_payment(db: Session, booking: Booking, checkout: Checkout) -> Booking:
    booking.payment_reference = checkout.payment_id
    db.commit()
    db.refresh(booking)
    return booking


def confirm_deposit_payment(
    db: Session,
    payment_id: str,
    notifier: EventEmitter | None = None,
) -> Booking:
    """
    Match a processor payment to the pending booking it funds and confirm it.

    Repeated webhook deliveries for an already confirmed booking are no-ops.
    """
    booking = db.query(Booking).filter(Booking.payment_reference == payment_id).first()
    if booking is None:
        raise NotFound(f"No booking for payment {payment_id}")

    if booking.status == CONFIRMED and booking.deposit_paid:
        logger.info(f"Duplicate payment webhook ignored: payment_id={payment_id}")
        return booking

    booking.deposit_paid = True
    db.commit()

    if booking.status == PENDING:
        booking = transition_booking(db, booking.id, CONFIRMED, notifier=notifier)

    logger.info(f"Deposit confirmed: booking_id={booking.id}, payment_id={payment_id}")
    return booking
