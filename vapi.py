"""Outbound voice calls through the Vapi API."""

import logging
from typing import Any, Dict

from config import Settings
from service_utils import ServiceCallError, ServiceConfigError, request_json


logger = logging.getLogger(__name__)

SERVICE = "Vapi"
VAPI_BASE_URL = "https://api.vapi.ai"
DEFAULT_GREETING = "Hello from the Real Estate API"


class VapiClient:
    def __init__(self, settings: Settings):
        self.token = settings.vapi_token
        self.assistant_id = settings.vapi_assistant_id
        self.phone_number_id = settings.vapi_phone_number_id
        self.timeout = settings.http_timeout_s

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            raise ServiceConfigError(SERVICE, "VAPI_PUBLIC_TOKEN is not set")
        return {"Authorization": f"Bearer {self.token}", "Content-Type": "application/json"}

    def initiate_call(self, phone_number: str, message: str = "") -> Dict[str, Any]:
        headers = self._headers()
        if not self.assistant_id:
            raise ServiceConfigError(SERVICE, "VAPI_ASSISTANT_ID is not set")

        greeting = message or DEFAULT_GREETING
        payload: Dict[str, Any] = {
            "assistantId": self.assistant_id,
            "customer": {"number": phone_number},
            "assistantOverrides": {"firstMessage": greeting},
        }
        if self.phone_number_id:
            payload["phoneNumberId"] = self.phone_number_id

        logger.info(f"Initiating Vapi call to: {phone_number}")
        data = request_json(SERVICE, "POST", f"{VAPI_BASE_URL}/call", self.timeout, json=payload, headers=headers)
        if not data.get("id"):
            raise ServiceCallError(SERVICE, "response did not include a call id")
        return {
            "call_id": data["id"],
            "status": data.get("status", "queued"),
            "phone_number": phone_number,
            "message": greeting,
        }

    def check_call_status(self, call_id: str) -> Dict[str, Any]:
        headers = self._headers()
        logger.info(f"Checking Vapi call status for: {call_id}")
        data = request_json(SERVICE, "GET", f"{VAPI_BASE_URL}/call/{call_id}", self.timeout, headers=headers)
        return {
            "call_id": data.get("id", call_id),
            "status": data.get("status", "unknown"),
            "phone_number": (data.get("customer") or {}).get("number"),
        }
