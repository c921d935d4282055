from __future__ import annotations

import pytest
import requests

from conftest import FakeResponse
from portfolio_page import client as client_module
from portfolio_page.client import BackendError, CommentsClient, load_json_source


def test_fetch_comments_builds_query(session):
    session.get_replies.append(FakeResponse(["x", 3, None]))
    client = CommentsClient("http://backend/", session=session)
    assert client.fetch_comments(4) == ["x", "3", ""]
    assert session.calls == [("GET", "http://backend/data", {"maxComments": 4})]


def test_non_list_payload_is_an_error(session):
    session.get_replies.append(FakeResponse({"comments": []}))
    with pytest.raises(BackendError):
        CommentsClient("http://backend", session=session).fetch_comments(1)


def test_transport_error_is_wrapped(session):
    session.post_replies.append(requests.Timeout("timed out"))
    with pytest.raises(BackendError, match="timed out") as info:
        CommentsClient("http://backend", session=session).delete_all()
    assert isinstance(info.value.__cause__, requests.Timeout)


def test_bad_local_json_is_backend_error(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(BackendError):
        load_json_source(str(path))


def test_url_source_closes_its_own_session(monkeypatch, session):
    session.get_replies.append(FakeResponse({"data": []}))
    monkeypatch.setattr(client_module.requests, "Session", lambda: session)
    assert load_json_source("http://backend/static/data/happiest_countries.json") == {"data": []}
    assert session.calls == [("GET", "http://backend/static/data/happiest_countries.json", None)]
    assert session.closed
