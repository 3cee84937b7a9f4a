# backend/ritto/schemas/services.py

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    duration: int = Field(gt=0, le=24 * 60)

    model_config = {"from_attributes": True}


class ServiceUpdate(BaseModel):
    is_active: Optional[bool] = None
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, ge=0)
    duration: Optional[int] = Field(None, gt=0, le=24 * 60)

    model_config = {"from_attributes": True}


class ServiceRead(BaseModel):
    id: int
    business_id: int
    name: str
    price: Decimal
    duration: int
    is_active: bool

    model_config = {"from_attributes": True}
