# backend/ritto/schemas/bookings.py

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional
from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    service_id: int
    date: dt.date
    time: dt.time = Field(description="Slot start, HH:MM")

    customer_name: str
    customer_email: str
    customer_phone: str

    receipt_reference: Optional[str] = Field(
        None, description="Stored path of an uploaded transfer receipt"
    )

    model_config = {"from_attributes": True}


class BookingRead(BaseModel):
    id: int
    business_id: int
    service_id: int
    service_name: str
    service_price: Decimal

    date: dt.date
    slot_start: dt.time

    customer_name: str
    customer_email: str
    customer_phone: str

    status: str
    deposit_paid: bool
    deposit_amount: Decimal
    deposit_receipt_ref: Optional[str] = None

    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}


class BookingCreated(BaseModel):
    booking: BookingRead
    deposit_amount: Decimal
    redirect_url: Optional[str] = None


class BookingTransition(BaseModel):
    status: Literal["pending", "confirmed", "cancelled", "no_show"]
