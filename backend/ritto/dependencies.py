"""FastAPI dependencies wiring collaborators into the routers."""

from fastapi import Depends, Header, HTTPException, status
from redis import Redis
from sqlalchemy.orm import Session

from .config import get_settings
from .database import get_db
from .models import Business
from .redis_client import get_redis_client
from .services.business import get_owner_business
from .services.events import EventEmitter
from .services.payments import PaymentGateway


def get_redis() -> Redis | None:
    return get_redis_client()


def get_notifier(redis: Redis | None = Depends(get_redis)) -> EventEmitter | None:
    if redis is None:
        return None
    return EventEmitter(redis)


def get_payments():
    settings = get_settings()
    if not settings.payment_api_url:
        yield None
        return

    gateway = PaymentGateway(
        base_url=settings.payment_api_url,
        api_key=settings.payment_api_key,
        return_url=settings.public_base_url,
        timeout=settings.payment_timeout_seconds,
    )
    try:
        yield gateway
    finally:
        gateway.close()


def get_current_owner(x_owner_id: str | None = Header(None)) -> str:
    """Owner identity forwarded by the auth layer in front of this API."""
    if not x_owner_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return x_owner_id


def get_business(
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
) -> Business:
    return get_owner_business(db, owner_id)
