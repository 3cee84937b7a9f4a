# backend/ritto/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from redis import Redis, RedisError
from sqlalchemy.exc import OperationalError

from .dependencies import get_redis
from .errors import BookingEngineError, CollaboratorUnavailable, IllegalTransition, OverlapError
from .logging_config import setup_logging
from .routers import (
    bookings,
    businesses,
    dashboard,
    exception_dates,
    payments,
    public,
    schedules,
    services,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Booking API starting")
    yield


app = FastAPI(title="Ritto Booking API", lifespan=lifespan)

app.include_router(businesses.router)
app.include_router(services.router)
app.include_router(schedules.router)
app.include_router(exception_dates.router)
app.include_router(bookings.router)
app.include_router(dashboard.router)
app.include_router(public.router)
app.include_router(payments.router)


@app.exception_handler(BookingEngineError)
async def booking_engine_error_handler(request: Request, exc: BookingEngineError):
    body = {"detail": exc.message, "error": exc.code}
    if isinstance(exc, OverlapError):
        body["weekday"] = exc.weekday
    if isinstance(exc, IllegalTransition):
        body["current"] = exc.current
        body["target"] = exc.target
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(OperationalError)
async def store_unavailable_handler(request: Request, exc: OperationalError):
    # lock wait / statement timeout / connection loss
    logger.error(f"Store unavailable on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "detail": "Storage temporarily unavailable, retry",
            "error": CollaboratorUnavailable.code,
        },
    )


@app.get("/health")
def health(redis: Redis | None = Depends(get_redis)):
    if redis is None:
        return {"status": "ok", "redis": None}
    try:
        return {"status": "ok", "redis": redis.ping()}
    except RedisError as e:
        logger.warning(f"Redis ping failed: {e}")
        return {"status": "degraded", "redis": False}
