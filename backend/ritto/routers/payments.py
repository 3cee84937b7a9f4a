# backend/ritto/routers/payments.py

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_notifier
from ..schemas.bookings import BookingRead
from ..schemas.payments import PaymentWebhook
from ..services.events import EventEmitter
from ..services.payments import confirm_deposit_payment

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/webhook", response_model=BookingRead | None)
def payment_webhook(
    data: PaymentWebhook,
    db: Session = Depends(get_db),
    notifier: EventEmitter | None = Depends(get_notifier),
):
    """Deposit charge callback; only approved payments confirm a booking."""
    if data.status != "approved":
        logger.info(f"Payment {data.payment_id} ignored with status {data.status}")
        return None
    return confirm_deposit_payment(db, data.payment_id, notifier)
