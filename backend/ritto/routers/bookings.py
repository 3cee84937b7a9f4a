# backend/ritto/routers/bookings.py
# Owner side. PATCH = 405, DELETE = 405 (bookings only change status)

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_business, get_notifier
from ..models import Business
from ..schemas.bookings import BookingRead, BookingTransition
from ..services.events import EventEmitter
from ..services.ledger import get_booking, list_bookings, transition_booking

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/", response_model=list[BookingRead])
def list_business_bookings(
    target_date: date | None = Query(None, alias="date"),
    booking_status: str | None = Query(None, alias="status"),
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
):
    return list_bookings(db, business.id, target_date, booking_status)


@router.get("/{id}", response_model=BookingRead)
def get_business_booking(
    id: int,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
):
    return get_booking(db, id, business.id)


@router.post("/{id}/transition", response_model=BookingRead)
def transition_business_booking(
    id: int,
    data: BookingTransition,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    notifier: EventEmitter | None = Depends(get_notifier),
):
    """Confirm / reject a pending booking, or mark a confirmed one no-show/cancelled."""
    return transition_booking(db, id, data.status, business.id, notifier)


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
