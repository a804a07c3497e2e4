from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, List, Optional

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

import wordnik_client as client_module  # noqa: E402

API_KEY = "test-api-key"
BASE_URL = "https://api.wordnik.test/v4"


class DummyResponse:
    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        body: Optional[bytes] = None,
    ) -> None:
        if body is None:
            body = b"" if payload is None else json.dumps(payload).encode("utf-8")
        self.status_code = status_code
        self.content = body
        self.text = body.decode("utf-8")

    def json(self) -> Any:
        return json.loads(self.text)


class RecordingSession:
    def __init__(self) -> None:
        self.responses: List[Any] = []
        self.calls: List[dict] = []

    def queue(self, status_code: int = 200, payload: Any = None, body=None) -> None:
        self.responses.append(DummyResponse(status_code, payload, body))

    def queue_error(self, exc: Exception) -> None:
        self.responses.append(exc)

    def request(self, method: str, url: str, **kwargs: Any) -> DummyResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        result = self.responses.pop(0) if self.responses else DummyResponse(404)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def last_call(self) -> dict:
        return self.calls[-1]


@pytest.fixture()
def session():
    return RecordingSession()


@pytest.fixture()
def client(session):
    return client_module.WordnikClient(API_KEY, base_url=BASE_URL, session=session)


@pytest.fixture()
def authed_client(client, session):
    session.queue(200, {"token": "session-token", "userId": 42})
    client.authenticate("user", "pass")
    return client
