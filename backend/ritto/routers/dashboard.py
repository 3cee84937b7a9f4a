# backend/ritto/routers/dashboard.py

from datetime import date

from fastapi import APIRouter, Depends, Query
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_business, get_redis
from ..models import Business
from ..schemas.dashboard import DashboardSummaryRead, OccupancyResponse
from ..services.dashboard import dashboard_summary
from ..services.slots.occupancy import get_occupancy

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/occupancy", response_model=OccupancyResponse)
def get_day_occupancy(
    target_date: date = Query(..., alias="date"),
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    return OccupancyResponse(
        date=target_date,
        occupancy=get_occupancy(db, business, target_date, redis),
    )


@router.get("/summary", response_model=DashboardSummaryRead)
def get_dashboard_summary(
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    return dashboard_summary(db, business, redis=redis)
