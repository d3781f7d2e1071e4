"""
Gemini LLM client

Calls the Gemini `generateContent` REST endpoint and returns the first text
candidate. The API key travels in the `x-goog-api-key` header so it never shows
up in logged request URLs.
"""

from typing import Any, Optional

import httpx
import orjson
from pydantic import SecretStr

from src.platform.exception.exceptions import ExternalServiceError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_llm_client import ILlmClient


class GeminiLlmClient(ILlmClient):
    def __init__(
        self,
        *,
        api_key: SecretStr,
        model: str,
        base_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._transport = transport

    @property
    def generate_url(self) -> str:
        return f'{self.base_url}/models/{self.model}:generateContent'

    @Logger.io(truncate_content=True)
    async def generate(self, *, prompt: str) -> str:
        if not self.api_key.get_secret_value():
            raise ExternalServiceError('Booking assistant is not configured')

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.generate_url,
                    headers={'x-goog-api-key': self.api_key.get_secret_value()},
                    json={'contents': [{'parts': [{'text': prompt}]}]},
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                Logger.base.warning(
                    f'⚠️ [LLM] {self.model} answered HTTP {e.response.status_code}'
                )
                raise ExternalServiceError('Booking assistant is unavailable') from e
            except httpx.HTTPError as e:
                raise ExternalServiceError('Booking assistant is unavailable') from e

        return self._extract_text(response.content)

    @staticmethod
    def _extract_text(content: bytes) -> str:
        try:
            payload: dict[str, Any] = orjson.loads(content)
            parts = payload['candidates'][0]['content']['parts']
            text = ''.join(part.get('text', '') for part in parts)
        except (orjson.JSONDecodeError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise ExternalServiceError('Booking assistant returned an unexpected response') from e

        if not text.strip():
            raise ExternalServiceError('Booking assistant returned an empty response')
        return text
