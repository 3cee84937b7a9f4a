# backend/ritto/schemas/businesses.py

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional
from pydantic import BaseModel


class BusinessCreate(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    slot_interval_minutes: int = 30

    deposit_enabled: bool = False
    deposit_type: Literal["fixed", "percentage"] = "fixed"
    deposit_value: Decimal = Decimal("0")
    deposit_bank: Optional[str] = None
    deposit_account_name: Optional[str] = None
    deposit_transfer_alias: Optional[str] = None

    model_config = {"from_attributes": True}


class BusinessUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    slot_interval_minutes: Optional[int] = None

    deposit_enabled: Optional[bool] = None
    deposit_type: Optional[Literal["fixed", "percentage"]] = None
    deposit_value: Optional[Decimal] = None
    deposit_bank: Optional[str] = None
    deposit_account_name: Optional[str] = None
    deposit_transfer_alias: Optional[str] = None

    model_config = {"from_attributes": True}


class BusinessRead(BaseModel):
    id: int
    name: str
    slug: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    slot_interval_minutes: int

    deposit_enabled: bool
    deposit_type: str
    deposit_value: Decimal
    deposit_bank: Optional[str] = None
    deposit_account_name: Optional[str] = None
    deposit_transfer_alias: Optional[str] = None

    accepts_bookings: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PublicBusinessRead(BaseModel):
    """What the public booking page may see."""
    id: int
    name: str
    slug: str
    phone: Optional[str] = None
    address: Optional[str] = None

    deposit_enabled: bool
    deposit_bank: Optional[str] = None
    deposit_account_name: Optional[str] = None
    deposit_transfer_alias: Optional[str] = None

    accepts_bookings: bool

    model_config = {"from_attributes": True}
