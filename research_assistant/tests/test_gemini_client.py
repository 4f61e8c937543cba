import asyncio
import json

import aiohttp
import pytest

from research_assistant.core.ai.config import AIServiceConfig
from research_assistant.core.ai.gemini_client import RATE_LIMIT_EXCEEDED, GeminiClient
from research_assistant.core.ai.response import ErrorKind


class FakeResponse:
    def __init__(self, status, body="", reason=""):
        self.status = status
        self.reason = reason
        self._body = body.encode("utf-8") if isinstance(body, str) else body

    async def read(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession, replaying queued responses."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        return self.post(url, **kwargs)

    async def close(self):
        self.closed = True


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def ok(text):
    body = json.dumps({"candidates": [{"content": {"parts": [{"text": text}]}}]})
    return FakeResponse(200, body, "OK")

def too_many_requests():
    return FakeResponse(429, '{"error": {"code": 429}}', "Too Many Requests")

@pytest.fixture
def config():
    return AIServiceConfig(api_url="https://ai.example.test/v1/models/m:generateContent", api_key="secret")

def make_client(config, responses):
    session = FakeSession(responses)
    sleep = RecordingSleep()
    return GeminiClient(config, session=session, sleep=sleep), session, sleep

def test_request_shape(config):
    client, session, _ = make_client(config, [ok("fine")])
    asyncio.run(client.generate("Write a concise summary:\n\nText"))

    url, kwargs = session.calls[0]
    assert url == config.api_url
    assert kwargs["params"] == {"key": "secret"}
    assert kwargs["json"] == {"contents": [{"parts": [{"text": "Write a concise summary:\n\nText"}]}]}

def test_retries_rate_limit_with_exponential_backoff(config):
    client, session, sleep = make_client(config, [too_many_requests(), too_many_requests(), ok("done")])
    result = asyncio.run(client.generate("prompt"))

    assert result.ok
    assert result.text == "done"
    assert result.attempts == 3
    assert sleep.delays == [2.0, 4.0]
    assert len(session.calls) == 3

def test_non_rate_limit_error_is_not_retried(config):
    client, session, sleep = make_client(config, [FakeResponse(500, "boom", "Internal Server Error"), ok("unused")])
    result = asyncio.run(client.generate("prompt"))

    assert result.error == ErrorKind.UPSTREAM
    assert result.text.startswith("Error calling AI API: 500")
    assert sleep.delays == []
    assert len(session.calls) == 1

def test_exhausted_rate_limit_returns_sentinel(config):
    client, session, sleep = make_client(config, [too_many_requests() for _ in range(3)])
    result = asyncio.run(client.generate("prompt"))

    assert result.text == RATE_LIMIT_EXCEEDED
    assert result.error == ErrorKind.RATE_LIMITED
    assert len(session.calls) == 3
    assert sleep.delays == [2.0, 4.0]

def test_connection_error_is_not_retried(config):
    client, session, sleep = make_client(config, [aiohttp.ClientConnectionError("refused")])
    result = asyncio.run(client.generate("prompt"))

    assert result.error == ErrorKind.UPSTREAM
    assert "refused" in result.text
    assert sleep.delays == []

def test_timeout_is_not_retried(config):
    client, _, sleep = make_client(config, [asyncio.TimeoutError()])
    result = asyncio.run(client.generate("prompt"))

    assert result.error == ErrorKind.UPSTREAM
    assert result.text == "Error calling AI API: request timed out"
    assert sleep.delays == []

def test_malformed_success_body_is_absorbed(config):
    client, _, _ = make_client(config, [FakeResponse(200, '{"candidates": []}')])
    result = asyncio.run(client.generate("prompt"))

    assert result.error == ErrorKind.MALFORMED_RESPONSE
    assert result.text == "No valid response from AI."

def test_cancellation_during_backoff_abandons_retries(config):
    session = FakeSession([too_many_requests(), ok("never")])

    async def scenario():
        client = GeminiClient(config, session=session)
        task = asyncio.create_task(client.generate("prompt"))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
    assert len(session.calls) == 1

def test_borrowed_session_is_not_closed(config):
    client, session, _ = make_client(config, [])
    asyncio.run(client.close())
    assert session.closed is False

def test_health_check_requires_api_key():
    client = GeminiClient(AIServiceConfig(api_key=""), session=FakeSession([]))
    assert asyncio.run(client.health_check()) is False

def test_health_check_queries_model_resource(config):
    client, session, _ = make_client(config, [FakeResponse(200, "{}")])
    assert asyncio.run(client.health_check()) is True
    assert session.calls[0][0] == "https://ai.example.test/v1/models/m"

def test_undecodable_success_body_is_absorbed(config):
    client, _, _ = make_client(config, [FakeResponse(200, b"\xff\xfe not utf-8", "OK")])
    result = asyncio.run(client.generate("prompt"))

    assert result.error == ErrorKind.MALFORMED_RESPONSE
    assert result.text.startswith("Error parsing AI response:")

def test_undecodable_error_body_is_upstream_error(config):
    client, _, sleep = make_client(config, [FakeResponse(502, b"\xff\xff", "Bad Gateway")])
    result = asyncio.run(client.generate("prompt"))

    assert result.error == ErrorKind.UPSTREAM
    assert result.text == "Error calling AI API: 502 Bad Gateway"
    assert sleep.delays == []

def test_rate_limit_with_undecodable_body_is_still_retried(config):
    client, session, sleep = make_client(
        config, [FakeResponse(429, b"\xff\xff", "Too Many Requests"), ok("recovered")]
    )
    result = asyncio.run(client.generate("prompt"))

    assert result.text == "recovered"
    assert result.attempts == 2
    assert sleep.delays == [2.0]
    assert len(session.calls) == 2
