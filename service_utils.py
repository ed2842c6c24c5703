"""Result type, error hierarchy and HTTP helper shared by the external service clients."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for failures talking to an external service."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service} error: {message}")
        self.service = service


class ServiceConfigError(ServiceError):
    """The service cannot be called because its configuration is incomplete."""


class ServiceCallError(ServiceError):
    """The service was called but failed or returned an unusable payload."""


@dataclass(frozen=True)
class ServiceResult:
    """Either the data an external service returned, or a degraded placeholder."""

    data: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, data: Any) -> "ServiceResult":
        return cls(data=data)

    @classmethod
    def degraded(cls, error: str) -> "ServiceResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_response(self) -> Dict[str, Any]:
        if self.ok:
            return self.data
        return {"error": self.error}


def safe_call(call: Callable[[], Any], service: str, placeholder: str, property_id: Optional[str] = None) -> ServiceResult:
    """Run ``call`` and wrap its outcome, returning a degraded result on any error."""
    try:
        data = call()
    except Exception as exc:
        logger.error(f"{service} API error (property_id={property_id}): {str(exc)}")
        return ServiceResult.degraded(placeholder)
    logger.info(f"{service} data retrieved successfully (property_id={property_id})")
    return ServiceResult.success(data)


def request_json(service: str, method: str, url: str, timeout: float, **kwargs) -> Any:
    """Issue an HTTP request and decode the JSON body, raising ServiceCallError on failure."""
    try:
        response = requests.request(method, url, timeout=timeout, **kwargs)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as exc:
        raise ServiceCallError(service, str(exc)) from exc
    except ValueError as exc:
        raise ServiceCallError(service, f"invalid JSON response: {exc}") from exc
