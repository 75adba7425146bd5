"""Rate quote endpoint with Redis caching"""
import logging
from fastapi import APIRouter

from globaledge.schemas.quote import QuoteRequest, QuoteResponse
from globaledge.services.quote_engine import compute_quote
from globaledge.core.redis import get_redis
from globaledge.core.config import settings
from globaledge.core.metrics import cache_hits, cache_misses, quotes_computed
from globaledge.utils.hashing import payload_hash

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


def _generate_cache_key(req: QuoteRequest) -> str:
    return f"price:{payload_hash(req.model_dump(mode='json', by_alias=True))}"


@router.post("/calc", response_model=QuoteResponse)
async def calc_quote(req: QuoteRequest):

    cache_key = _generate_cache_key(req)
    redis = get_redis()

    if redis is not None:
        try:
            cached = await redis.get(cache_key)
            if cached:
                cache_hits.labels(cache="price").inc()
                return QuoteResponse.model_validate_json(cached)
            cache_misses.labels(cache="price").inc()
        except Exception as e:
            logger.warning(f"Cache retrieval failed: {e}")

    quote = compute_quote(req)
    result = QuoteResponse(available=quote is not None, quote=quote)
    quotes_computed.labels(
        service_type=str(req.service_type),
        outcome="quoted" if quote is not None else "incomplete",
    ).inc()

    if redis is not None:
        try:
            await redis.set(
                cache_key,
                result.model_dump_json(),
                ex=settings.PRICE_CACHE_TTL
            )
        except Exception as e:
            logger.warning(f"Cache write failed: {e}")

    return result
