# backend/ritto/schemas/exception_dates.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class ExceptionDateCreate(BaseModel):
    date: date
    end_date: Optional[date] = Field(None, description="Inclusive end of a range block")
    reason: Optional[str] = None

    model_config = {"from_attributes": True}


class ExceptionDateRead(BaseModel):
    id: int
    business_id: int
    date: date
    reason: Optional[str] = None

    model_config = {"from_attributes": True}
