# backend/ritto/routers/exception_dates.py
# PATCH = 405, DELETE = ALLOWED (hard, one day at a time)

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_business, get_redis
from ..models import Business
from ..schemas.exception_dates import ExceptionDateCreate, ExceptionDateRead
from ..services.exception_calendar import block_dates, list_exceptions, unblock_date

router = APIRouter(prefix="/exception-dates", tags=["exception_dates"])


@router.get("/", response_model=list[ExceptionDateRead])
def list_exception_dates(
    date_from: date | None = None,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
):
    return list_exceptions(db, business.id, date_from)


@router.post("/", response_model=list[ExceptionDateRead], status_code=status.HTTP_201_CREATED)
def create_exception_dates(
    data: ExceptionDateCreate,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    return block_dates(db, business.id, data.date, data.end_date, data.reason, redis=redis)


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exception_date(
    id: int,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    unblock_date(db, business.id, id, redis=redis)
