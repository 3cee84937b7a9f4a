# backend/ritto/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from datetime import date
from pydantic import BaseModel, Field


class SlotRead(BaseModel):
    """A single slot of a day."""
    time: str = Field(description='"HH:MM"')
    capacity: int
    remaining_capacity: int


class SlotsDayResponse(BaseModel):
    """Slots of a day for one service."""
    business_id: int
    service_id: int
    date: date
    interval_minutes: int = Field(description="max(business default interval, service duration)")
    slots: list[SlotRead]
