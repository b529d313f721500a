"""
LLM Client - Gemini generateContent over httpx.
"""
import httpx
import logging
from typing import Optional

from .errors import TransportError
from ..config import get_gemini_url, settings

logger = logging.getLogger(__name__)


NO_RESPONSE = "No response from Gemini."


def _redact(text: str, api_key: str) -> str:
    """Hide the key in error text; request URLs carry it as a query parameter."""
    return text.replace(api_key, "***") if api_key else text


class GeminiClient:
    """Async client for a single generateContent endpoint. No retries."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.url = url or get_gemini_url()
        self.timeout = timeout or settings.request_timeout
        self._transport = transport

    async def generate(self, payload: dict, api_key: str) -> str:
        """
        Send a request built by PromptComposer.

        Args:
            payload: {"contents": [...]} request body
            api_key: Validated Gemini key

        Returns:
            Text of the first candidate's first part, or NO_RESPONSE
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.url,
                    params={"key": api_key},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
            except httpx.HTTPError as e:
                logger.error(f"Gemini transport error: {type(e).__name__}")
                raise TransportError(f"Gemini API error: {_redact(str(e), api_key)}") from e

        if response.is_error:
            message = _redact(self._error_message(response), api_key)
            logger.error(f"Gemini API error {response.status_code}: {message}")
            raise TransportError(f"Gemini API error: {message}")

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError("Gemini API error: invalid JSON response") from e
        return self._first_text(data)

    def _error_message(self, response: httpx.Response) -> str:
        """Server-provided error message, when the body carries one."""
        try:
            data = response.json()
        except ValueError:
            return "Unknown error"
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
        return "Unknown error"

    def _first_text(self, data: dict) -> str:
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return NO_RESPONSE
        if not isinstance(text, str) or not text:
            return NO_RESPONSE
        return text


# Global LLM client instance
llm_client: Optional[GeminiClient] = None


def get_llm_client() -> GeminiClient:
    """Get or create the global Gemini client."""
    global llm_client
    if llm_client is None:
        llm_client = GeminiClient()
    return llm_client
