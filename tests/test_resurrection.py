"""
Resurrection Tests

ResurrectionChecker.check_resurrection(item_id):
- no service configured: leave a needs_resurrection_check marker (24 h TTL)
- service answers: no marker, whatever the verdict
- service unreachable or failing: fall back to the marker

HttpResurrectionClient is exercised against a fake requests session.

Run:
----
    pytest tests/test_resurrection.py -v
"""

import asyncio
from datetime import timedelta

import pytest
import requests

from skillrank import (
    GatewayError,
    ResurrectionChecker,
    ResurrectionResult,
    ResurrectionServiceError,
    needs_resurrection_key,
)
from skillrank_server.services import HttpResurrectionClient

from .conftest import NOW

KEY = needs_resurrection_key("sk_old")


class StubClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def check(self, item_id):
        self.calls.append(item_id)
        if self.error is not None:
            raise self.error
        return self.result


class FailingScratch:
    async def put(self, key, value, ttl_seconds):
        raise GatewayError("scratch down")


class TestChecker:
    def test_no_service_leaves_marker_for_a_day(self, scratch):
        checker = ResurrectionChecker(scratch)
        assert checker.service_configured is False
        asyncio.run(checker.check_resurrection("sk_old"))
        assert asyncio.run(scratch.get(KEY)) == "1"
        assert scratch.expires_at(KEY) == NOW + timedelta(hours=24)

    @pytest.mark.parametrize("resurrected", [True, False])
    def test_service_verdict_leaves_no_marker(self, scratch, resurrected):
        client = StubClient(result=ResurrectionResult(resurrected=resurrected, reason="activity"))
        checker = ResurrectionChecker(scratch, client=client)
        asyncio.run(checker.check_resurrection("sk_old"))
        assert client.calls == ["sk_old"]
        assert asyncio.run(scratch.get(KEY)) is None

    @pytest.mark.parametrize(
        "error",
        [
            ResurrectionServiceError("unreachable"),
            ResurrectionServiceError("service returned 503", 503),
            RuntimeError("unexpected"),
        ],
    )
    def test_service_failure_falls_back_to_marker(self, scratch, error):
        checker = ResurrectionChecker(scratch, client=StubClient(error=error))
        asyncio.run(checker.check_resurrection("sk_old"))
        assert asyncio.run(scratch.get(KEY)) == "1"

    def test_marker_write_failure_does_not_raise(self):
        checker = ResurrectionChecker(FailingScratch())
        asyncio.run(checker.check_resurrection("sk_old"))


class FakeResponse:
    def __init__(self, status_code=200, payload=None, body_error=None):
        self.status_code = status_code
        self._payload = payload
        self._body_error = body_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self._body_error is not None:
            raise self._body_error
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []
        self.closed = False

    def post(self, url, json=None, headers=None, timeout=None):
        self.requests.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


class TestHttpClient:
    def test_posts_item_id_with_bearer_and_timeout(self):
        session = FakeSession(FakeResponse(payload={"resurrected": True}))
        client = HttpResurrectionClient("https://worker.example/", "s3cret", timeout=2.5, session=session)

        result = asyncio.run(client.check("sk_old"))

        assert result.resurrected is True
        sent = session.requests[0]
        assert sent["url"] == "https://worker.example/check"
        assert sent["json"] == {"itemId": "sk_old"}
        assert sent["headers"] == {"Authorization": "Bearer s3cret"}
        assert sent["timeout"] == 2.5

    def test_reason_is_optional(self):
        session = FakeSession(FakeResponse(payload={"resurrected": False, "reason": "no activity"}))
        client = HttpResurrectionClient("https://worker.example", "s", session=session)
        result = client.check_sync("sk_old")
        assert result.resurrected is False
        assert result.reason == "no activity"

    def test_http_error_carries_status(self):
        session = FakeSession(FakeResponse(status_code=503))
        client = HttpResurrectionClient("https://worker.example", "s", session=session)
        with pytest.raises(ResurrectionServiceError) as exc:
            client.check_sync("sk_old")
        assert exc.value.status_code == 503

    def test_connection_error_is_wrapped(self):
        session = FakeSession(error=requests.exceptions.ConnectTimeout("timed out"))
        client = HttpResurrectionClient("https://worker.example", "s", session=session)
        with pytest.raises(ResurrectionServiceError):
            client.check_sync("sk_old")

    def test_non_json_body_is_wrapped(self):
        session = FakeSession(FakeResponse(body_error=ValueError("Expecting value")))
        client = HttpResurrectionClient("https://worker.example", "s", session=session)
        with pytest.raises(ResurrectionServiceError):
            client.check_sync("sk_old")

    def test_unexpected_shape_is_wrapped(self):
        session = FakeSession(FakeResponse(payload={"resurrected": "maybe?"}))
        client = HttpResurrectionClient("https://worker.example", "s", session=session)
        with pytest.raises(ResurrectionServiceError):
            client.check_sync("sk_old")

    @pytest.mark.parametrize("payload", [{}, {"reason": "no verdict"}])
    def test_missing_verdict_is_wrapped(self, payload):
        session = FakeSession(FakeResponse(payload=payload))
        client = HttpResurrectionClient("https://worker.example", "s", session=session)
        with pytest.raises(ResurrectionServiceError):
            client.check_sync("sk_old")

    def test_missing_verdict_leaves_marker_end_to_end(self, scratch):
        session = FakeSession(FakeResponse(payload={"reason": "busy"}))
        client = HttpResurrectionClient("https://worker.example", "s", session=session)
        checker = ResurrectionChecker(scratch, client=client)
        asyncio.run(checker.check_resurrection("sk_old"))
        assert asyncio.run(scratch.get(KEY)) == "1"

    def test_requires_url_and_secret(self):
        with pytest.raises(ValueError):
            HttpResurrectionClient("", "s")
        with pytest.raises(ValueError):
            HttpResurrectionClient("https://worker.example", "")

    def test_unreachable_service_leaves_marker_end_to_end(self, scratch):
        session = FakeSession(error=requests.exceptions.ConnectionError("refused"))
        client = HttpResurrectionClient("https://worker.example", "s", session=session)
        checker = ResurrectionChecker(scratch, client=client)
        asyncio.run(checker.check_resurrection("sk_old"))
        assert asyncio.run(scratch.get(KEY)) == "1"

    def test_close_closes_session(self):
        session = FakeSession()
        HttpResurrectionClient("https://worker.example", "s", session=session).close()
        assert session.closed is True
