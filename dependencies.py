"""FastAPI dependencies exposing the clients built in ``create_app``.

Tests swap these out through ``app.dependency_overrides``.
"""

from fastapi import Request

from google_places import GooglePlacesClient
from openai_service import OpenAIService
from scraper_api import ScraperApiClient
from vapi import VapiClient


def get_places_client(request: Request) -> GooglePlacesClient:
    return request.app.state.places_client


def get_openai_service(request: Request) -> OpenAIService:
    return request.app.state.openai_service


def get_scraper_client(request: Request) -> ScraperApiClient:
    return request.app.state.scraper_client


def get_vapi_client(request: Request) -> VapiClient:
    return request.app.state.vapi_client
