from fastapi import HTTPException
from globaledge.core.redis import require_redis
from globaledge.core.config import settings
from globaledge.core.metrics import rate_limit_exceeded

async def check_rate_limit(client_id: str):
    redis = require_redis()
    key = f"rl:{client_id}"
    current = await redis.get(key)
    if current is None:
        await redis.set(key, "1", ex=settings.RATE_LIMIT_WINDOW)
        return
    count = int(current)
    if count >= settings.RATE_LIMIT:
        rate_limit_exceeded.inc()
        raise HTTPException(status_code=429, detail="Rate limit exceeded")
    await redis.incr(key)
