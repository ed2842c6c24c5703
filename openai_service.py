"""Text generation through the OpenAI API."""

import logging
from typing import Any, Dict, Optional, Tuple

from openai import OpenAI, OpenAIError

from config import Settings
from prompts import build_chat_prompt, build_property_description_prompt
from schemas import PropertyRecord
from service_utils import ServiceCallError, ServiceConfigError


logger = logging.getLogger(__name__)

SERVICE = "OpenAI"


class OpenAIService:
    def __init__(self, settings: Settings, client: Optional[OpenAI] = None):
        self.settings = settings
        self.model = settings.openai_model
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.settings.openai_api_key:
                raise ServiceConfigError(SERVICE, "OPENAI_API_KEY is not set")
            self._client = OpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.openai_timeout_s,
                max_retries=0,
            )
        return self._client

    def complete(self, prompt: str, max_tokens: int) -> Tuple[str, int]:
        """Send a single-turn prompt and return ``(text, total_tokens)``."""
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
                temperature=self.settings.openai_temperature,
            )
        except OpenAIError as exc:
            raise ServiceCallError(SERVICE, str(exc)) from exc

        if not response.choices or response.choices[0].message.content is None:
            raise ServiceCallError(SERVICE, "empty completion")
        tokens = response.usage.total_tokens if response.usage else 0
        return response.choices[0].message.content.strip(), tokens

    def get_property_analysis(self, prompt: str) -> Dict[str, Any]:
        text, tokens = self.complete(prompt, self.settings.openai_max_tokens)
        return {"analysis": text, "model": self.model, "tokens": tokens}

    def generate_property_description(self, prop: PropertyRecord) -> str:
        text, _ = self.complete(build_property_description_prompt(prop), max_tokens=500)
        return text

    def process_chat_message(self, user_prompt: str) -> str:
        text, _ = self.complete(build_chat_prompt(user_prompt), max_tokens=500)
        return text
