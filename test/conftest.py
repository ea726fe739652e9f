import datetime as dt
import json

import httpx
import pytest

from study_assistant.models import Task

# 2026-01-01 is a Thursday
TODAY = dt.date(2026, 1, 1)


class RecordingTransport:
    """httpx transport that answers every request with one canned reply and keeps the requests."""

    def __init__(self, status_code: int = 200, body=None, text: str = None):
        self.status_code = status_code
        self.body = body
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def today() -> dt.date:
    return TODAY


@pytest.fixture
def mock_upstream():
    """Returns (transport, client) for a canned upstream reply."""
    def _make(status_code: int = 200, body=None, text: str = None):
        transport = RecordingTransport(status_code, body, text)
        return transport, httpx.Client(transport=httpx.MockTransport(transport))
    return _make


@pytest.fixture
def task_factory():
    def _make(task_id: str, title: str, **fields):
        data = {"due_date": TODAY, **fields}
        return Task(id=task_id, title=title, **data)
    return _make
