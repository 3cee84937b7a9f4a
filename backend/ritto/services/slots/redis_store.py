# backend/ritto/services/slots/redis_store.py
"""
Redis cache for generated day grids.

Key format: slots:grid:{business_id}:{date}:{interval}:{generation}
Value: Hash where field = "HH:MM", value = capacity of the covering window.
Sentinel: field "__empty__" marks "calculated, zero slots".

Generation = "{business_gen}.{date_gen}", read *before* the grid is computed:
    slots:gen:{business_id}          INCR on schedule/interval changes
    slots:gen:{business_id}:{date}   random token on exception date changes

Invalidation bumps the generation first, so a grid computed from data read
before the change is stored under a key nobody reads any more.

Only the raw grid (schedule x exceptions) is cached. Consumed capacity is
always read from the database, so bookings never invalidate this cache.
"""

import logging
import uuid
from datetime import date

from redis import Redis, RedisError

from .config import SlotConfig, get_slot_config
from .timegrid import format_hhmm, parse_hhmm
from .types import SlotCandidate

logger = logging.getLogger(__name__)

EMPTY_SENTINEL = "__empty__"


def _decode(value) -> str:
    return value.decode() if isinstance(value, bytes) else value


class SlotsRedisStore:
    """Redis storage wrapper for per-day slot grids."""

    KEY_PREFIX = "slots:grid"
    GEN_PREFIX = "slots:gen"

    def __init__(self, redis: Redis, config: SlotConfig | None = None):
        self.redis = redis
        self.config = config or get_slot_config()

    def _key(self, business_id: int, dt: date, interval: int, generation: str) -> str:
        return f"{self.KEY_PREFIX}:{business_id}:{dt.isoformat()}:{interval}:{generation}"

    def _business_gen_key(self, business_id: int) -> str:
        return f"{self.GEN_PREFIX}:{business_id}"

    def _date_gen_key(self, business_id: int, dt: date) -> str:
        return f"{self.GEN_PREFIX}:{business_id}:{dt.isoformat()}"

    # ── Generation ───────────────────────────────────────────────────────

    def generation(self, business_id: int, dt: date) -> str | None:
        """Current generation of a day's grid, or None when Redis is unreachable."""
        try:
            business_gen, date_gen = self.redis.mget(
                self._business_gen_key(business_id),
                self._date_gen_key(business_id, dt),
            )
        except RedisError as e:
            logger.warning(f"Slot cache generation read failed for business {business_id}: {e}")
            return None
        return f"{_decode(business_gen) or 0}.{_decode(date_gen) or 0}"

    # ── Write ────────────────────────────────────────────────────────────

    def store_grid(
        self,
        business_id: int,
        dt: date,
        interval: int,
        generation: str,
        slots: list[SlotCandidate],
    ) -> None:
        """Store a generated grid. Empty list -> sentinel is stored."""
        key = self._key(business_id, dt, interval, generation)
        if slots:
            mapping = {format_hhmm(s.start): s.capacity for s in slots}
        else:
            mapping = {EMPTY_SENTINEL: 0}

        try:
            pipe = self.redis.pipeline()
            pipe.delete(key)
            pipe.hset(key, mapping=mapping)
            pipe.expire(key, self.config.cache_ttl_seconds)
            pipe.execute()
        except RedisError as e:
            logger.warning(f"Slot cache write failed for {key}: {e}")

    # ── Read ─────────────────────────────────────────────────────────────

    def get_grid(
        self,
        business_id: int,
        dt: date,
        interval: int,
        generation: str,
    ) -> list[SlotCandidate] | None:
        """Cached grid sorted by start time, or None on cache miss."""
        key = self._key(business_id, dt, interval, generation)
        try:
            raw = self.redis.hgetall(key)
        except RedisError as e:
            logger.warning(f"Slot cache read failed for {key}: {e}")
            return None

        if not raw:
            return None

        slots = [
            SlotCandidate(start=parse_hhmm(_decode(field)), capacity=int(value))
            for field, value in raw.items()
            if _decode(field) != EMPTY_SENTINEL
        ]
        return sorted(slots)

    # ── Invalidate ───────────────────────────────────────────────────────

    def bump_generation(
        self,
        business_id: int,
        dates: list[date] | None = None,
    ) -> bool:
        """
        Retire every grid computed so far for a business (or for some dates).

        A date token lives two TTLs: a grid written under the replaced
        generation expires first, so a token lapsing back to "0" never
        revives a stale grid.
        """
        try:
            if dates:
                token = uuid.uuid4().hex
                pipe = self.redis.pipeline()
                for dt in dates:
                    pipe.set(
                        self._date_gen_key(business_id, dt),
                        token,
                        ex=2 * self.config.cache_ttl_seconds,
                    )
                pipe.execute()
            else:
                self.redis.incr(self._business_gen_key(business_id))
        except RedisError as e:
            logger.warning(f"Slot cache generation bump failed for business {business_id}: {e}")
            return False
        return True

    def delete_grids(
        self,
        business_id: int,
        dates: list[date] | None = None,
    ) -> int:
        """
        Delete cached grids for a business.

        Args:
            business_id: Business ID
            dates: Specific dates (every interval), or None for all dates.

        Returns:
            Number of deleted keys.
        """
        if dates:
            patterns = [
                f"{self.KEY_PREFIX}:{business_id}:{dt.isoformat()}:*" for dt in dates
            ]
        else:
            patterns = [f"{self.KEY_PREFIX}:{business_id}:*"]

        try:
            keys = [key for pattern in patterns for key in self.redis.scan_iter(match=pattern)]
            if not keys:
                return 0
            return self.redis.delete(*keys)
        except RedisError as e:
            logger.warning(f"Slot cache invalidation failed for business {business_id}: {e}")
            return 0
