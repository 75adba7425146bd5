import logging
from typing import Optional
from redis.asyncio import Redis
from globaledge.core.config import settings
from globaledge.core.errors import StorageUnavailableError

logger = logging.getLogger(__name__)

redis: Optional[Redis] = None

async def init_redis() -> Redis:
    global redis
    try:
        redis = Redis.from_url(settings.REDIS_URL, decode_responses=False)
        await redis.ping()
        logger.info("Connected to Redis")
        return redis
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        redis = None
        raise

async def close_redis():
    global redis
    if redis:
        await redis.close()
        redis = None

def get_redis() -> Optional[Redis]:
    """Quote caching degrades gracefully, so callers may get None here."""
    return redis

def require_redis() -> Redis:
    if redis is None:
        raise StorageUnavailableError("Redis not initialized. Call init_redis() first.")
    return redis
