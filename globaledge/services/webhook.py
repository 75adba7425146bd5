import httpx
import asyncio
import logging
import time
from globaledge.core.config import settings
from globaledge.core.metrics import webhook_deliveries, webhook_duration

logger = logging.getLogger(__name__)


async def send_webhook(payload: dict, retries: int | None = None) -> bool:

    if not settings.WEBHOOK_URL:
        logger.debug(f"No WEBHOOK_URL configured, skipping {payload.get('event')} event")
        return False

    if retries is None:
        retries = settings.WEBHOOK_RETRIES

    backoff = 1.0
    ref = payload.get("tracking_number")

    for attempt in range(1, retries + 1):
        start_time = time.time()
        try:
            async with httpx.AsyncClient(timeout=settings.WEBHOOK_TIMEOUT) as client:
                response = await client.post(settings.WEBHOOK_URL, json=payload)

                if 200 <= response.status_code < 300:
                    webhook_deliveries.labels(status="success", retry_count=attempt - 1).inc()
                    webhook_duration.labels(status="success").observe(time.time() - start_time)
                    logger.info(f"Webhook delivery succeeded for shipment {ref}")
                    return True
                else:
                    webhook_deliveries.labels(status="failed", retry_count=attempt - 1).inc()
                    logger.warning(
                        f"Webhook delivery failed (attempt {attempt}/{retries}): "
                        f"Status {response.status_code} for shipment {ref}"
                    )
        except httpx.TimeoutException:
            webhook_deliveries.labels(status="timeout", retry_count=attempt - 1).inc()
            logger.warning(
                f"Webhook timeout (attempt {attempt}/{retries}) for shipment {ref}"
            )
        except Exception as e:
            webhook_deliveries.labels(status="error", retry_count=attempt - 1).inc()
            logger.warning(
                f"Webhook delivery error (attempt {attempt}/{retries}): {e} "
                f"for shipment {ref}"
            )
        webhook_duration.labels(status="failed").observe(time.time() - start_time)

        if attempt < retries:
            await asyncio.sleep(backoff)
            backoff *= 2.0

    logger.error(f"Webhook delivery failed after {retries} attempts for shipment {ref}")
    return False
