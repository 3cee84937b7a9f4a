"""Business setup and settings."""

import logging
from decimal import Decimal

from redis import Redis
from sqlalchemy.orm import Session

from ..errors import NotFound, ValidationError
from ..models import Business
from .deposit import DEPOSIT_TYPES
from .slots.config import ALLOWED_INTERVALS
from .slots.invalidator import invalidate_business_cache
from .slug import unique_business_slug

logger = logging.getLogger(__name__)


def get_owner_business(db: Session, owner_id: str) -> Business:
    business = db.query(Business).filter(Business.owner_id == owner_id).first()
    if business is None:
        raise NotFound("No business set up for this account")
    return business


# Columns a PATCH may change but never clear
REQUIRED_SETTINGS = (
    "name",
    "slot_interval_minutes",
    "deposit_enabled",
    "deposit_type",
    "deposit_value",
)


def _validate_settings(values: dict) -> None:
    cleared = [field for field in REQUIRED_SETTINGS if field in values and values[field] is None]
    if cleared:
        raise ValidationError(f"{', '.join(cleared)} cannot be empty")

    interval = values.get("slot_interval_minutes")
    if interval is not None and interval not in ALLOWED_INTERVALS:
        raise ValidationError(f"slot_interval_minutes must be one of {ALLOWED_INTERVALS}")

    deposit_type = values.get("deposit_type")
    if deposit_type is not None and deposit_type not in DEPOSIT_TYPES:
        raise ValidationError(f"deposit_type must be one of {DEPOSIT_TYPES}")

    deposit_value = values.get("deposit_value")
    if deposit_value is not None and Decimal(deposit_value) < 0:
        raise ValidationError("deposit_value must not be negative")


def _validate_deposit(business: Business) -> None:
    """Enabled deposits need transfer details customers can pay into."""
    if not business.deposit_enabled:
        return
    if business.deposit_type == "percentage" and Decimal(business.deposit_value or 0) > 100:
        raise ValidationError("A percentage deposit cannot exceed 100")
    if not (business.deposit_bank and business.deposit_account_name and business.deposit_transfer_alias):
        raise ValidationError("Bank, account name and transfer alias are required for deposits")


def create_business(db: Session, owner_id: str, values: dict) -> Business:
    if db.query(Business.id).filter(Business.owner_id == owner_id).first():
        raise ValidationError("This account already has a business")
    if not (values.get("name") or "").strip():
        raise ValidationError("Business name is required")
    _validate_settings(values)

    business = Business(owner_id=owner_id, **values)
    business.slug = unique_business_slug(db, business.name)
    _validate_deposit(business)

    db.add(business)
    db.commit()
    db.refresh(business)
    logger.info(f"Business created: business_id={business.id}, slug={business.slug}")
    return business


def update_business(
    db: Session,
    business: Business,
    values: dict,
    redis: Redis | None = None,
) -> Business:
    """
    Apply a partial settings update.

    The slug is assigned once at creation and survives renames, so public
    booking links already shared with customers keep working.
    """
    _validate_settings(values)
    if "name" in values and not (values["name"] or "").strip():
        raise ValidationError("Business name is required")

    interval_changed = (
        "slot_interval_minutes" in values
        and values["slot_interval_minutes"] != business.slot_interval_minutes
    )

    for field, value in values.items():
        setattr(business, field, value)

    if not business.deposit_enabled:
        business.deposit_bank = None
        business.deposit_account_name = None
        business.deposit_transfer_alias = None
    try:
        _validate_deposit(business)
    except ValidationError:
        db.rollback()
        raise

    db.commit()
    db.refresh(business)

    if interval_changed:
        invalidate_business_cache(redis, business.id)

    return business
