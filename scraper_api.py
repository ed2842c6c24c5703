"""Web page fetching through the ScraperAPI proxy."""

import logging
from typing import Any, Dict

import requests

from config import Settings
from service_utils import ServiceCallError, ServiceConfigError


logger = logging.getLogger(__name__)

SERVICE = "ScraperAPI"
SCRAPER_API_URL = "https://api.scraperapi.com"


class ScraperApiClient:
    def __init__(self, settings: Settings):
        self.api_key = settings.scraper_api_key
        self.timeout = settings.scraper_timeout_s

    def scrape_website(self, url: str) -> Dict[str, Any]:
        """Fetch ``url`` through the proxy and return its raw body."""
        if not self.api_key:
            raise ServiceConfigError(SERVICE, "SCRAPER_API_KEY is not set")

        logger.info(f"Scraping website: {url}")
        try:
            response = requests.get(
                SCRAPER_API_URL,
                params={"api_key": self.api_key, "url": url},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ServiceCallError(SERVICE, str(exc)) from exc

        return {"url": url, "status_code": response.status_code, "data": response.text}
