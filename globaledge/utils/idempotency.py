import json
from globaledge.core.redis import require_redis
from globaledge.core.config import settings

async def get_idempotent(key: str):
    if not key:
        return None
    redis = require_redis()
    v = await redis.get(f"idemp:{key}")
    return json.loads(v) if v else None

async def set_idempotent(key: str, value: dict):
    if not key:
        return
    redis = require_redis()
    await redis.set(f"idemp:{key}", json.dumps(value, default=str), ex=settings.IDEMPOTENCY_TTL)
