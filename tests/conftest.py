import pytest
from fastapi.testclient import TestClient

from config import Settings
from dependencies import (
    get_openai_service,
    get_places_client,
    get_scraper_client,
    get_vapi_client,
)
from main import create_app
from tests.utils import (
    FakeOpenAIService,
    FakePlacesClient,
    FakeScraperClient,
    FakeVapiClient,
)


@pytest.fixture
def settings():
    return Settings(rate_limit_enabled=False)


@pytest.fixture
def places():
    return FakePlacesClient()


@pytest.fixture
def openai_service():
    return FakeOpenAIService()


@pytest.fixture
def scraper():
    return FakeScraperClient()


@pytest.fixture
def vapi_client():
    return FakeVapiClient()


@pytest.fixture
def app(settings, places, openai_service, scraper, vapi_client):
    app = create_app(settings)
    app.dependency_overrides[get_places_client] = lambda: places
    app.dependency_overrides[get_openai_service] = lambda: openai_service
    app.dependency_overrides[get_scraper_client] = lambda: scraper
    app.dependency_overrides[get_vapi_client] = lambda: vapi_client
    return app


@pytest.fixture
def client(app):
    # Internal faults are asserted on as 500 responses rather than re-raised.
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
