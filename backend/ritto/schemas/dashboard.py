# backend/ritto/schemas/dashboard.py

from datetime import date
from decimal import Decimal
from pydantic import BaseModel


class OccupancyResponse(BaseModel):
    date: date
    occupancy: int


class TopServiceRead(BaseModel):
    service_id: int
    name: str
    count: int

    model_config = {"from_attributes": True}


class DashboardSummaryRead(BaseModel):
    date: date
    occupancy: int
    no_shows_this_month: int
    estimated_revenue: Decimal
    top_services: list[TopServiceRead]

    model_config = {"from_attributes": True}
