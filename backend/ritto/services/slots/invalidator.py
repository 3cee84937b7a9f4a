# backend/ritto/services/slots/invalidator.py
"""
Cache invalidation for business slot grids.

Triggers:
✓ Weekly schedule added/removed → new business generation
✓ Business default interval changed → new business generation
✓ Exception date created/deleted → new generation for affected dates

Does NOT trigger:
✗ Booking created/transitioned (consumption is read on-the-fly)

Callers invalidate after their commit. The generation bump retires grids
that a concurrent reader computed from pre-commit data; deleting the keys
afterwards only frees memory.
"""

from datetime import date, timedelta

from redis import Redis

from .redis_store import SlotsRedisStore


def invalidate_business_cache(
    redis: Redis | None,
    business_id: int,
    dates: list[date] | None = None,
) -> int:
    """
    Invalidate cached grids for a business.

    Returns:
        Number of deleted cache keys (0 when no Redis is configured)
    """
    if redis is None:
        return 0
    store = SlotsRedisStore(redis)
    store.bump_generation(business_id, dates)
    return store.delete_grids(business_id, dates)


def get_affected_dates(date_start: date, date_end: date) -> list[date]:
    """List of dates in range [date_start, date_end], both inclusive."""
    dates = []
    current = date_start
    while current <= date_end:
        dates.append(current)
        current += timedelta(days=1)
    return dates
