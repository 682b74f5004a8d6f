"""Shared fakes for the decode service (no live network in tests)."""

from __future__ import annotations

import pytest
import requests

import leetdecode as ld


class FakeResponse:
    def __init__(self, status: int = 200, payload=None, bad_json: bool = False):
        self.status_code = status
        self._payload = payload
        self._bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeHttp:
    """Stands in for requests.Session: records every POST, replays a canned reply."""

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response if response is not None else FakeResponse(payload={})
        self.error = error
        self.calls: list[dict] = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def settings() -> ld.Settings:
    return ld.Settings(ENDPOINT="https://decode.test/api/decode", FALLBACK_DELAY_MS=0)


@pytest.fixture
def sleeps(monkeypatch) -> list:
    recorded: list = []
    monkeypatch.setattr(ld.time, "sleep", recorded.append)
    return recorded
