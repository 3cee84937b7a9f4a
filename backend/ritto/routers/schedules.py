# backend/ritto/routers/schedules.py
# PATCH = 405 (delete + recreate), DELETE = ALLOWED (hard)

from fastapi import APIRouter, Depends, HTTPException, status
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_business, get_redis
from ..models import Business
from ..schemas.schedules import ScheduleCreate, ScheduleRead
from ..services.schedule import add_weekly_schedule, list_schedules, remove_schedule

router = APIRouter(prefix="/schedules", tags=["schedules"])


@router.get("/", response_model=list[ScheduleRead])
def list_weekly_schedules(
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
):
    return list_schedules(db, business.id)


@router.post("/", response_model=list[ScheduleRead], status_code=status.HTTP_201_CREATED)
def create_weekly_schedule(
    data: ScheduleCreate,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    return add_weekly_schedule(
        db,
        business.id,
        data.weekdays,
        data.start_time,
        data.end_time,
        data.capacity_per_slot,
        redis=redis,
    )


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_weekly_schedule(
    id: int,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    remove_schedule(db, business.id, id, redis=redis)
