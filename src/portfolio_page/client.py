from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import requests

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """A backend call failed in transport, status or payload."""


class CommentsClient:
    """Thin wrapper over the portfolio backend endpoints."""

    def __init__(self, base_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def fetch_comments(self, limit: int) -> List[str]:
        payload = self._get_json(self._url("/data"), params={"maxComments": limit})
        if not isinstance(payload, list):
            raise BackendError(f"Expected a list of comments, got {type(payload).__name__}")
        return ["" if c is None else str(c) for c in payload]

    def delete_all(self) -> None:
        self._post(self._url("/delete-data"))

    def add_comment(self, text: str) -> None:
        self._post(self._url("/data"), data={"comment": text, "shouldAddComment": "true"})

    def fetch_json(self, url: str) -> Any:
        return self._get_json(url)

    def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise BackendError(str(e)) from e
        except ValueError as e:
            # covers json.JSONDecodeError and requests' own JSON errors
            raise BackendError(f"Malformed JSON from {url}: {e}") from e

    def _post(self, url: str, data: Optional[dict] = None) -> None:
        logger.debug("POST %s", url)
        try:
            resp = self.session.post(url, data=data, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise BackendError(str(e)) from e


def load_json_source(source: str, client: Optional[CommentsClient] = None, timeout: float = 10.0) -> Any:
    """Load JSON from an http(s) URL or a local file path."""
    if source.startswith(("http://", "https://")):
        if client is not None:
            return client.fetch_json(source)
        with requests.Session() as session:
            return CommentsClient(source, timeout=timeout, session=session).fetch_json(source)
    path = Path(source)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise BackendError(f"Malformed JSON in {path}: {e}") from e
