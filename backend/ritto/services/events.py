"""
backend/ritto/services/events.py

Event emitter: pushes notification events to a Redis queue consumed by the
mail sender. Delivery is fire-and-forget; a failed push is logged and never
rolls back the booking that triggered it.
"""

import json
import logging
import time

from redis import Redis, RedisError

logger = logging.getLogger(__name__)

QUEUE_KEY = "events:notifications"


class EventEmitter:
    def __init__(self, redis: Redis, queue_key: str = QUEUE_KEY):
        self.redis = redis
        self.queue_key = queue_key

    def emit(self, event_type: str, payload: dict) -> bool:
        """Push an event; returns False when the queue is unreachable."""
        event = {
            "type": event_type,
            **payload,
            "ts": int(time.time()),
        }
        try:
            self.redis.rpush(self.queue_key, json.dumps(event, default=str))
        except RedisError as e:
            logger.error(f"Failed to emit event {event_type}: {e}")
            return False

        logger.info(f"Event emitted: {event_type} → {self.queue_key}")
        return True


def booking_event_payload(booking) -> dict:
    return {
        "booking_id": booking.id,
        "business_id": booking.business_id,
        "status": booking.status,
        "date": booking.date.isoformat(),
        "hour": booking.slot_start.strftime("%H:%M"),
        "service_name": booking.service_name,
        "customer_email": booking.customer_email,
    }
