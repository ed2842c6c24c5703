"""Thin endpoints over the scraping, chat and voice-call services.

Service failures raised here are turned into 502 responses by the handler
registered in ``main.create_app``.
"""

from typing import Any, Optional
import logging

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from dependencies import get_openai_service, get_scraper_client, get_vapi_client
from openai_service import OpenAIService
from schemas import CallResponse, PropertyDescriptionRequest, ScrapeResponse, ValidationErrorResponse
from scraper_api import ScraperApiClient
from validation import validate_document
from vapi import VapiClient


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["integrations"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _json_string(payload: Any, key: str) -> Optional[str]:
    value = payload.get(key) if isinstance(payload, dict) else None
    if isinstance(value, str) and value.strip():
        return value
    return None


@router.get("/scrape", response_model=ScrapeResponse)
def scrape(
    url: Optional[str] = Query(None, description="Page to fetch through the scraping proxy"),
    scraper: ScraperApiClient = Depends(get_scraper_client),
):
    if not url:
        return _error(400, "Missing ?url=")
    return ScrapeResponse(**scraper.scrape_website(url))


@router.post("/chat")
def chat(
    payload: Any = Body(None),
    openai_service: OpenAIService = Depends(get_openai_service),
):
    prompt = _json_string(payload, "prompt")
    if prompt is None:
        return _error(400, 'Please provide a "prompt" in JSON')
    logger.info(f"Chat request: {len(prompt)} characters")
    return {"response": openai_service.process_chat_message(prompt)}


@router.post("/property-description")
def property_description(
    payload: Any = Body(None),
    openai_service: OpenAIService = Depends(get_openai_service),
):
    """Generate listing copy for a single property record."""
    result = validate_document(payload, PropertyDescriptionRequest)
    if not result.valid:
        return JSONResponse(
            status_code=400,
            content=ValidationErrorResponse(errors=result.errors).model_dump(),
        )
    prop = result.document.property
    logger.info(f"Generating property description: property_id={prop.id}")
    return {"propertyId": prop.id, "description": openai_service.generate_property_description(prop)}


@router.post("/vapi/call", response_model=CallResponse)
def start_call(
    payload: Any = Body(None),
    vapi_client: VapiClient = Depends(get_vapi_client),
):
    phone_number = _json_string(payload, "phoneNumber")
    if phone_number is None:
        return _error(400, 'Please provide a "phoneNumber" in JSON')
    message = _json_string(payload, "message") or ""
    return CallResponse(**vapi_client.initiate_call(phone_number, message))


@router.get("/vapi/call/{call_id}", response_model=CallResponse)
def call_status(call_id: str, vapi_client: VapiClient = Depends(get_vapi_client)):
    return CallResponse(**vapi_client.check_call_status(call_id))
