# backend/ritto/schemas/schedules.py

from datetime import time
from pydantic import BaseModel, Field


class ScheduleCreate(BaseModel):
    weekdays: list[str] = Field(description='Canonical names: "monday" .. "sunday"')
    start_time: time
    end_time: time
    capacity_per_slot: int = 1

    model_config = {"from_attributes": True}


class ScheduleRead(BaseModel):
    id: int
    business_id: int
    weekday: str
    start_time: time
    end_time: time
    capacity_per_slot: int

    model_config = {"from_attributes": True}
