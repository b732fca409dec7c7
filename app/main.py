from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from app.api import quotes
from app.core.config import settings
from app.core.metrics import request_count, request_duration, get_metrics_text
import time
import logging

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count every request and time it, labelled by method, path and status."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        status = 500

        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            endpoint = request.url.path
            request_count.labels(method=request.method, endpoint=endpoint, status=status).inc()
            request_duration.labels(method=request.method, endpoint=endpoint).observe(
                time.time() - start_time
            )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting...")
    if settings.WEBHOOK_URL:
        logger.info("Enquiry notification enabled")
    else:
        logger.info("Enquiry notification disabled (WEBHOOK_URL not set)")

    yield

    logger.info("Application shutting down...")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)

app.include_router(quotes.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # the quote form reads `message`; `detail` keeps FastAPI's per-field errors
    logger.info(f"Rejected invalid request to {request.url.path}: {len(exc.errors())} error(s)")
    return JSONResponse(
        status_code=422,
        content={
            "message": "Invalid quote request",
            "detail": jsonable_encoder(exc.errors()),
        }
    )


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check():
    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "dependencies": {
            "webhook": "configured" if settings.WEBHOOK_URL else "disabled"
        }
    }


@app.get("/readiness", tags=["monitoring"])
async def readiness_check():
    return {
        "ready": True,
        "service": settings.API_TITLE
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }
