# backend/ritto/routers/public.py
"""
Public booking endpoints (no owner identity).

GET  /public/{slug_or_id}                  - business card
GET  /public/{slug_or_id}/services         - active services
GET  /public/{slug_or_id}/slots            - bookable slots for a service/day
POST /public/{business_id}/bookings        - submit a booking
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_notifier, get_payments, get_redis
from ..models import Service as DBService
from ..schemas.bookings import BookingCreate, BookingCreated, BookingRead
from ..schemas.businesses import PublicBusinessRead
from ..schemas.services import ServiceRead
from ..schemas.slots import SlotRead, SlotsDayResponse
from ..services.booking_flow import Customer, get_active_service, get_public_business, submit_booking
from ..services.events import EventEmitter
from ..services.payments import PaymentGateway
from ..services.slots.generator import effective_interval, get_available_slots
from ..services.slots.timegrid import format_hhmm

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/{slug_or_id}", response_model=PublicBusinessRead)
def get_business_card(slug_or_id: str, db: Session = Depends(get_db)):
    return get_public_business(db, slug_or_id)


@router.get("/{slug_or_id}/services", response_model=list[ServiceRead])
def list_public_services(slug_or_id: str, db: Session = Depends(get_db)):
    business = get_public_business(db, slug_or_id)
    return (
        db.query(DBService)
        .filter(DBService.business_id == business.id, DBService.is_active.is_(True))
        .order_by(DBService.created_at, DBService.id)
        .all()
    )


@router.get("/{slug_or_id}/slots", response_model=SlotsDayResponse)
def get_slots_day(
    slug_or_id: str,
    service_id: int,
    target_date: date = Query(..., alias="date"),
    include_full: bool = False,
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    """Slots with remaining capacity for a service on a day."""
    business = get_public_business(db, slug_or_id)
    service = get_active_service(db, business.id, service_id)

    slots = get_available_slots(db, business, service, target_date, redis, include_full)

    return SlotsDayResponse(
        business_id=business.id,
        service_id=service.id,
        date=target_date,
        interval_minutes=effective_interval(business, service),
        slots=[
            SlotRead(
                time=format_hhmm(slot.start),
                capacity=slot.capacity,
                remaining_capacity=slot.remaining_capacity,
            )
            for slot in slots
        ],
    )


@router.post(
    "/{business_id}/bookings",
    response_model=BookingCreated,
    status_code=status.HTTP_201_CREATED,
)
def create_public_booking(
    business_id: int,
    data: BookingCreate,
    db: Session = Depends(get_db),
    notifier: EventEmitter | None = Depends(get_notifier),
    payments: PaymentGateway | None = Depends(get_payments),
):
    result = submit_booking(
        db,
        business_id=business_id,
        service_id=data.service_id,
        target_date=data.date,
        slot_start=data.time,
        customer=Customer(
            name=data.customer_name,
            email=data.customer_email,
            phone=data.customer_phone,
        ),
        receipt_reference=data.receipt_reference,
        notifier=notifier,
        payments=payments,
    )
    return BookingCreated(
        booking=BookingRead.model_validate(result.booking),
        deposit_amount=result.deposit_amount,
        redirect_url=result.redirect_url,
    )
