"""
Test data factories and fakes shared across the suite.
"""

import copy
from typing import Any, Dict, List, Optional

import requests

from schemas import RealEstateDocument


DEFAULT_PROPERTY = {
    "id": "prop-001",
    "address": {"street": "123 Main St", "city": "Austin", "state": "TX", "zip": "78701"},
    "purchase_price": 100000,
    "arv": 150000,
    "market_status": "lead",
}

DEFAULT_BUYER = {"id": "buyer-001", "name": "Jane Investor", "email": "jane@acmecapital.com"}
DEFAULT_LEAD = {"source": "website", "date_created": "2024-01-15T10:30:00Z"}
DEFAULT_CONTRACTOR = {"id": "contractor-001", "name": "Bob Builder"}

PLACES_RESULT = {
    "address": "123 Main St, Austin, TX 78701, USA",
    "location": {"lat": 30.2672, "lng": -97.7431},
    "placeId": "ChIJ-test-place",
    "neighborhoods": [{"name": "Downtown", "vicinity": "Austin", "types": ["neighborhood"]}],
    "pointsOfInterest": [{"name": "Zilker Park", "type": "park", "vicinity": "Austin", "rating": 4.8}],
}

NARRATIVE_RESULT = {"analysis": "Solid flip candidate.", "model": "gpt-4o-mini", "tokens": 321}


def make_document(**sections: Any) -> Dict[str, Any]:
    """A valid real estate document; keyword args replace or add top-level groups."""
    document = {
        "property": copy.deepcopy(DEFAULT_PROPERTY),
        "buyer": copy.deepcopy(DEFAULT_BUYER),
        "lead": copy.deepcopy(DEFAULT_LEAD),
        "contractor": copy.deepcopy(DEFAULT_CONTRACTOR),
    }
    document.update(copy.deepcopy(sections))
    return document


def make_property(**fields: Any) -> Dict[str, Any]:
    prop = copy.deepcopy(DEFAULT_PROPERTY)
    prop.update(fields)
    return prop


def parse_document(**sections: Any) -> RealEstateDocument:
    return RealEstateDocument.model_validate(make_document(**sections))


class FakePlacesClient:
    def __init__(self, result: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.result = PLACES_RESULT if result is None else result
        self.error = error
        self.calls: List[str] = []

    def get_place_details(self, address: str) -> Dict[str, Any]:
        self.calls.append(address)
        if self.error:
            raise self.error
        return self.result


class FakeOpenAIService:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.prompts: List[str] = []

    def _record(self, prompt: str) -> None:
        self.prompts.append(prompt)
        if self.error:
            raise self.error

    def get_property_analysis(self, prompt: str) -> Dict[str, Any]:
        self._record(prompt)
        return dict(NARRATIVE_RESULT)

    def process_chat_message(self, user_prompt: str) -> str:
        self._record(user_prompt)
        return f"Answer to: {user_prompt}"

    def generate_property_description(self, prop) -> str:
        self._record(prop.id)
        return "Charming bungalow close to downtown."


class FakeScraperClient:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.urls: List[str] = []

    def scrape_website(self, url: str) -> Dict[str, Any]:
        self.urls.append(url)
        if self.error:
            raise self.error
        return {"url": url, "status_code": 200, "data": "<html>listing</html>"}


class FakeVapiClient:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[Any] = []

    def initiate_call(self, phone_number: str, message: str = "") -> Dict[str, Any]:
        self.calls.append((phone_number, message))
        if self.error:
            raise self.error
        return {
            "call_id": "call-123",
            "status": "queued",
            "phone_number": phone_number,
            "message": message or "Hello from the Real Estate API",
        }

    def check_call_status(self, call_id: str) -> Dict[str, Any]:
        self.calls.append(call_id)
        if self.error:
            raise self.error
        return {"call_id": call_id, "status": "in-progress", "phone_number": "+15125550100"}


class FakeResponse:
    """Stand-in for ``requests.Response``."""

    def __init__(self, payload: Any = None, status_code: int = 200, text: str = ""):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self) -> Any:
        if self.payload is None:
            raise ValueError("No JSON object could be decoded")
        return self.payload
