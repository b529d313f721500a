"""Tests for the Gemini client."""
import json

import httpx
import pytest

from plan_assistant.services.errors import TransportError
from plan_assistant.services.llm_client import NO_RESPONSE, GeminiClient


URL = "https://gemini.test/v1beta/models/test-model:generateContent"


def make_client(handler) -> GeminiClient:
    return GeminiClient(url=URL, timeout=5.0, transport=httpx.MockTransport(handler))


class TestGeminiClient:
    """Test request shape and response handling."""

    @pytest.mark.asyncio
    async def test_returns_first_candidate_text(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.url.params["key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "candidates": [
                    {"content": {"parts": [{"text": "1. Book a flight"}, {"text": "ignored"}]}},
                    {"content": {"parts": [{"text": "second candidate"}]}},
                ]
            })

        payload = {"contents": [{"role": "user", "parts": [{"text": "hi"}]}]}
        text = await make_client(handler).generate(payload, "AIzaKey")

        assert text == "1. Book a flight"
        assert seen["key"] == "AIzaKey"
        assert seen["body"] == payload

    @pytest.mark.asyncio
    async def test_missing_candidates_falls_back(self):
        client = make_client(lambda request: httpx.Response(200, json={"candidates": []}))

        assert await client.generate({"contents": []}, "AIzaKey") == NO_RESPONSE

    @pytest.mark.asyncio
    async def test_server_error_message_surfaced(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": {"message": "API key not valid."}})

        with pytest.raises(TransportError, match="API key not valid."):
            await make_client(handler).generate({"contents": []}, "AIzaKey")

    @pytest.mark.asyncio
    async def test_error_without_message(self):
        client = make_client(lambda request: httpx.Response(500, text="oops"))

        with pytest.raises(TransportError, match="Unknown error"):
            await client.generate({"contents": []}, "AIzaKey")

    @pytest.mark.asyncio
    async def test_network_failure_becomes_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="connection refused"):
            await make_client(handler).generate({"contents": []}, "AIzaKey")

    @pytest.mark.asyncio
    async def test_non_string_text_falls_back(self):
        client = make_client(lambda request: httpx.Response(200, json={
            "candidates": [{"content": {"parts": [{"text": {"a": 1}}]}}]
        }))

        assert await client.generate({"contents": []}, "AIzaKey") == NO_RESPONSE

    @pytest.mark.asyncio
    async def test_key_not_leaked_in_errors(self, caplog):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(f"cannot reach {request.url}", request=request)

        with pytest.raises(TransportError) as excinfo:
            await make_client(handler).generate({"contents": []}, "AIzaSecretKey")

        assert "AIzaSecretKey" not in str(excinfo.value)
        assert "AIzaSecretKey" not in caplog.text

    @pytest.mark.asyncio
    async def test_key_not_leaked_in_server_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": {"message": "Bad key AIzaSecretKey"}})

        with pytest.raises(TransportError) as excinfo:
            await make_client(handler).generate({"contents": []}, "AIzaSecretKey")

        assert "AIzaSecretKey" not in str(excinfo.value)
