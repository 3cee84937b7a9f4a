# backend/ritto/services/slots/config.py
"""
Slot configuration and weekday naming.
"""

from dataclasses import dataclass
from datetime import date
from functools import lru_cache

from ...config import get_settings

# Canonical weekday keys, index == date.weekday()
WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

ALLOWED_INTERVALS = (15, 30, 45, 60)
DEFAULT_INTERVAL = 30


def weekday_name(target_date: date) -> str:
    """Stable weekday key for a date, independent of display locale."""
    return WEEKDAYS[target_date.weekday()]


def weekday_index(name: str) -> int:
    return WEEKDAYS.index(name)


@dataclass(frozen=True)
class SlotConfig:
    """
    Configuration for slot generation.

    Attributes:
        cache_ttl_seconds: Redis TTL for a cached day grid
        max_capacity: Upper bound for capacity_per_slot
    """
    cache_ttl_seconds: int = 86400
    max_capacity: int = 100

    def __post_init__(self):
        if self.cache_ttl_seconds <= 0:
            raise ValueError(f"cache_ttl_seconds must be positive, got {self.cache_ttl_seconds}")


@lru_cache
def get_slot_config() -> SlotConfig:
    return SlotConfig(cache_ttl_seconds=get_settings().slot_cache_ttl_seconds)
