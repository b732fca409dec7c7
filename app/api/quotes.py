"""Conveyancing quote endpoint"""
import logging
from fastapi import APIRouter, BackgroundTasks
from fastapi.responses import JSONResponse

from app.schemas.quote import QuoteRequest, QuoteResult
from app.services.pricing import calculate_quote
from app.services.webhook import notify_enquiry
from app.core.config import settings
from app.core.metrics import quotes_calculated, quote_failures

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["quotes"])

QUOTE_FAILED_MESSAGE = "Failed to calculate quote"


@router.post("/quote", response_model=QuoteResult)
async def create_quote(req: QuoteRequest, background_tasks: BackgroundTasks):

    try:
        result = calculate_quote(req.to_transaction_input())
    except Exception:
        quote_failures.inc()
        logger.exception(f"Quote calculation failed for {req.transaction_type} transaction")
        return JSONResponse(status_code=500, content={"message": QUOTE_FAILED_MESSAGE})

    quotes_calculated.labels(transaction_type=req.transaction_type.value).inc()

    if req.contact is not None and settings.WEBHOOK_URL:
        background_tasks.add_task(notify_enquiry, req, result)

    return result
