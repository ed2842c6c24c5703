"""
Property Analysis API - FastAPI backend for real estate deal analysis.
Validates property records, enriches them with Google Places and OpenAI,
and computes fix-and-flip investment metrics.
"""

from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from config import Settings
from google_places import GooglePlacesClient
from integrations import router as integrations_router
from market import router as market_router
from openai_service import OpenAIService
from property_analysis import router as property_analysis_router
from schemas import ValidationErrorDetail, ValidationErrorResponse
from scraper_api import ScraperApiClient
from service_utils import ServiceError
from validation import InvalidDocumentError, format_field_path
from vapi import VapiClient


logger = logging.getLogger(__name__)


async def invalid_document_handler(request: Request, exc: InvalidDocumentError):
    logger.warning(f"Rejected non-object payload on {request.url.path}: {exc}")
    body = ValidationErrorResponse(
        errors=[ValidationErrorDetail(field="", constraint="type", message=str(exc))]
    )
    return JSONResponse(status_code=400, content=body.model_dump())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        ValidationErrorDetail(
            field=format_field_path(error["loc"]),
            constraint=error["type"],
            message=error["msg"],
        )
        for error in exc.errors()
    ]
    body = ValidationErrorResponse(errors=errors, message="Invalid request.")
    return JSONResponse(status_code=400, content=body.model_dump())


async def service_error_handler(request: Request, exc: ServiceError):
    logger.error(f"{exc.service} call failed on {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"error": f"{exc.service} request failed"})


async def internal_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title="Property Analysis API",
        description="Real estate deal analysis powered by Google Places and OpenAI",
        version="1.0.0",
    )

    app.state.settings = settings
    app.state.places_client = GooglePlacesClient(settings)
    app.state.openai_service = OpenAIService(settings)
    app.state.scraper_client = ScraperApiClient(settings)
    app.state.vapi_client = VapiClient(settings)

    app.state.limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        enabled=settings.rate_limit_enabled,
    )
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvalidDocumentError, invalid_document_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(property_analysis_router)
    app.include_router(integrations_router)
    app.include_router(market_router)

    @app.get("/")
    async def root():
        return {
            "service": "Property Analysis API",
            "version": "1.0.0",
            "status": "running",
            "endpoints": {
                "/api/property-analysis": "Validate, enrich and analyze a property deal",
                "/api/scrape": "Fetch a page through the scraping proxy",
                "/api/chat": "Ask the real estate assistant",
                "/api/property-description": "Generate listing copy for a property",
                "/api/listings": "Current for-sale listings by location",
                "/api/market-data": "City-level price and days-on-market snapshot",
                "/api/vapi/call": "Start an outbound voice call",
                "/health": "Health check",
            },
        }

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    logger.info(f"Property Analysis API configured (rate limit {settings.rate_limit}, enabled={settings.rate_limit_enabled})")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
