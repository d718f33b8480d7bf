"""
Gemini API Client

Calls the generateContent REST endpoint directly with httpx. The response
envelope is returned untouched; shape handling lives in analysis_service.

COST NOTES:
- Answers are flattened to "key: value" lines before prompting
- One single-turn request per submission, never retried
"""
import json
import logging
from typing import Optional

import httpx

from career_ai.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class GeminiError(Exception):
    """Raised when the Gemini API is unreachable or returns an error."""
    pass


class GeminiClient:
    """
    Thin wrapper over the Gemini generateContent endpoint.
    """

    def __init__(self, api_key: str = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.url = settings.gemini_generate_url
        self.temperature = settings.gemini_temperature
        self.max_output_tokens = settings.gemini_max_output_tokens
        self.timeout = settings.gemini_timeout_seconds
        # Injected in tests (httpx.MockTransport)
        self._transport = transport

    def build_request_body(self, prompt: str) -> dict:
        """Single-turn request with the configured generation settings."""
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}]
                }
            ],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens
            }
        }

    async def generate(self, prompt: str) -> dict:
        """
        Send the prompt and return the raw JSON envelope.

        Raises:
            GeminiError: on transport failure, non-2xx status or a non-JSON body
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    headers={"x-goog-api-key": self.api_key},
                    json=self.build_request_body(prompt)
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise GeminiError(f"Gemini returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise GeminiError(f"Gemini request failed: {exc}") from exc
        except ValueError as exc:
            raise GeminiError("Gemini returned a non-JSON body") from exc

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Gemini raw response: %s", json.dumps(data, indent=2))
        return data

    async def test_connection(self) -> bool:
        """Test if Gemini API is reachable"""
        try:
            data = await self.generate("Reply with exactly: OK")
            return isinstance(data, dict) and bool(data.get("candidates"))
        except GeminiError as e:
            logger.error("Gemini connection failed: %s", e)
            return False


# Singleton instance
_gemini_client: GeminiClient = None


def get_gemini_client() -> GeminiClient:
    """Get or create Gemini client (singleton pattern)"""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
    return _gemini_client
