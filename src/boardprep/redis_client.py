from functools import lru_cache

import redis

from .config import settings


@lru_cache(maxsize=1)
def get_redis() -> redis.Redis:
    """Shared client for attempt history and quiz sessions."""
    return redis.from_url(
        settings.REDIS_URL, decode_responses=True, health_check_interval=30
    )
