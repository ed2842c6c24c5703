"""Environment-driven configuration for the Property Analysis API."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.environ.get(name, "").strip()
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Settings shared by the app and every external client.

    Built once at start-up and passed by reference; nothing reads
    ``os.environ`` after this point.
    """

    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 1000
    openai_temperature: float = 0.7
    openai_timeout_s: float = 60.0

    google_places_api_key: Optional[str] = None
    scraper_api_key: Optional[str] = None
    vapi_token: Optional[str] = None
    vapi_assistant_id: Optional[str] = None
    vapi_phone_number_id: Optional[str] = None

    http_timeout_s: float = 10.0
    scraper_timeout_s: float = 60.0

    rate_limit: str = "100/15minutes"
    rate_limit_enabled: bool = True
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()
        return cls(
            openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
            openai_model=os.environ.get("OPENAI_MODEL", "gpt-4o-mini"),
            openai_max_tokens=int(os.environ.get("OPENAI_MAX_TOKENS", "1000")),
            openai_temperature=float(os.environ.get("OPENAI_TEMPERATURE", "0.7")),
            openai_timeout_s=float(os.environ.get("OPENAI_TIMEOUT_S", "60")),
            google_places_api_key=os.environ.get("GOOGLE_PLACES_API_KEY") or None,
            scraper_api_key=os.environ.get("SCRAPER_API_KEY") or None,
            vapi_token=os.environ.get("VAPI_PUBLIC_TOKEN") or None,
            vapi_assistant_id=os.environ.get("VAPI_ASSISTANT_ID") or None,
            vapi_phone_number_id=os.environ.get("VAPI_PHONE_NUMBER_ID") or None,
            http_timeout_s=float(os.environ.get("HTTP_TIMEOUT_S", "10")),
            scraper_timeout_s=float(os.environ.get("SCRAPER_TIMEOUT_S", "60")),
            rate_limit=os.environ.get("RATE_LIMIT", "100/15minutes"),
            rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", True),
            cors_origins=_env_list("CORS_ORIGINS", ["*"]),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
