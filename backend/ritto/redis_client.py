from functools import lru_cache

from redis import Redis

from .config import get_settings


@lru_cache
def get_redis_client() -> Redis | None:
    """Shared client, or None when no REDIS_URL is configured (cache/events off)."""
    settings = get_settings()
    if not settings.redis_url:
        return None
    return Redis.from_url(
        settings.redis_url,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_timeout,
        decode_responses=True,
    )
