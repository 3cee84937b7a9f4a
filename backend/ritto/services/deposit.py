"""Deposit amount required to book a service."""

from decimal import Decimal

from ..models import Business, Service
from ..utils import round_half_up

FIXED = "fixed"
PERCENTAGE = "percentage"

DEPOSIT_TYPES = (FIXED, PERCENTAGE)


def required_deposit(business: Business, service: Service) -> Decimal:
    """
    0 when deposits are off or the configured value is 0.
    Percentage deposits scale the service price; fixed ones do not.
    """
    value = Decimal(business.deposit_value or 0)
    if not business.deposit_enabled or value == 0:
        return Decimal("0")

    if business.deposit_type == PERCENTAGE:
        price = Decimal(service.price or 0)
        return Decimal(round_half_up(price * value / 100))

    return value


def deposit_required(business: Business, service: Service) -> bool:
    return required_deposit(business, service) > 0
