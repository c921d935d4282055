from __future__ import annotations
import json

import pytest
import requests


class FakeResponse:
    def __init__(self, payload=None, status: int = 200, text: str | None = None):
        self.payload = payload
        self.status_code = status
        self.text = text if text is not None else json.dumps(payload)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Records calls and answers from queued responses or exceptions."""

    def __init__(self):
        self.calls = []
        self.get_replies = []
        self.post_replies = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.closed = True

    def _next(self, replies):
        reply = replies.pop(0) if replies else FakeResponse([])
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def get(self, url, params=None, timeout=None):
        self.calls.append(("GET", url, params))
        return self._next(self.get_replies)

    def post(self, url, data=None, timeout=None):
        self.calls.append(("POST", url, data))
        return self._next(self.post_replies)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def notes():
    return []
