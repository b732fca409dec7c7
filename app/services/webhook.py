import httpx
import asyncio
import logging
import time
from app.core.config import settings
from app.core.metrics import webhook_deliveries, webhook_duration
from app.schemas.quote import QuoteRequest, QuoteResult

logger = logging.getLogger(__name__)


def build_enquiry_payload(req: QuoteRequest, quote: QuoteResult) -> dict:
    summary = quote.model_dump(mode="json", by_alias=True, exclude={"breakdown"})
    return {
        "transactionType": req.transaction_type.value,
        "contact": req.contact.model_dump(mode="json", by_alias=True) if req.contact else None,
        "purchasePrice": float(req.purchase.property_price) if req.purchase else None,
        "salePrice": float(req.sale.property_price) if req.sale else None,
        "quote": summary,
    }


async def send_webhook(
    payload: dict,
    url: str | None = None,
    retries: int | None = None,
    backoff: float = 1.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:

    url = url or settings.WEBHOOK_URL
    if not url:
        logger.debug("No webhook URL configured, skipping enquiry delivery")
        return False

    if retries is None:
        retries = settings.WEBHOOK_RETRIES

    email = (payload.get("contact") or {}).get("email")

    for attempt in range(1, retries + 1):
        start_time = time.time()
        try:
            async with httpx.AsyncClient(timeout=settings.WEBHOOK_TIMEOUT, transport=transport) as client:
                response = await client.post(url, json=payload)

                if 200 <= response.status_code < 300:
                    webhook_deliveries.labels(status="success").inc()
                    webhook_duration.labels(status="success").observe(time.time() - start_time)
                    logger.info(f"Enquiry webhook delivered for {email}")
                    return True
                else:
                    logger.warning(
                        f"Enquiry webhook failed (attempt {attempt}/{retries}): "
                        f"Status {response.status_code} for {email}"
                    )
        except httpx.TimeoutException:
            logger.warning(f"Enquiry webhook timeout (attempt {attempt}/{retries}) for {email}")
        except Exception as e:
            logger.warning(f"Enquiry webhook error (attempt {attempt}/{retries}): {e} for {email}")

        webhook_duration.labels(status="error").observe(time.time() - start_time)

        if attempt < retries:
            await asyncio.sleep(backoff)
            backoff *= 2.0

    webhook_deliveries.labels(status="failed").inc()
    logger.error(f"Enquiry webhook failed after {retries} attempts for {email}")
    return False


async def notify_enquiry(req: QuoteRequest, quote: QuoteResult) -> bool:
    """Hand the customer's contact details and quote to the configured CRM hook."""
    if req.contact is None or not settings.WEBHOOK_URL:
        return False
    return await send_webhook(build_enquiry_payload(req, quote))
