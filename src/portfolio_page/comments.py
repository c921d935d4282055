from __future__ import annotations
import html
import logging
import math
from typing import Callable, List, Optional

from .client import BackendError, CommentsClient
from .config import DEFAULT_MAX_COMMENTS, Settings

logger = logging.getLogger(__name__)

LOAD_ERROR = "Hey!! There was an error: {}"
DELETE_OK = "A truly sad day, your comments were deleted"
DELETE_FAILED = "Something went wrong in deleting your comments"
POST_FAILED = "Something went wrong in posting your comment"
POST_EMPTY = "Write something before posting a comment"


def format_comment(index: int, text: str) -> str:
    return f"Comment {index} is {text}"


def error_message(exc: BaseException) -> str:
    return str(exc) or repr(exc)


class CommentPanel:
    """Rendered content of the comments container."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def replace(self, lines: List[str]) -> None:
        self.lines = list(lines)

    def to_html(self) -> str:
        return "".join(f"<p>{html.escape(line)}</p>" for line in self.lines)


class CommentPanelController:
    """Owns the display preference and keeps the comment panel in sync with the backend.

    Every load takes a fresh generation number; a response that arrives after a
    newer load was started is dropped. Lines are staged and only swapped into the
    panel once the response is applied, so a failed load keeps the last render.
    """

    def __init__(
        self,
        client: CommentsClient,
        notify: Callable[[str], object],
        panel: Optional[CommentPanel] = None,
        default_limit: int = DEFAULT_MAX_COMMENTS,
    ):
        self.client = client
        self.notify = notify
        self.panel = panel or CommentPanel()
        self.default_limit = max(0, int(default_limit))
        self.preference = self.default_limit
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def normalize_limit(self, value) -> int:
        if value is None or (isinstance(value, str) and not value.strip()):
            return self.default_limit
        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"Comment limit must be a finite number, got {value!r}")
        return max(0, int(number))

    def load_comments(self, limit: Optional[int] = None) -> bool:
        limit = self.preference if limit is None else self.normalize_limit(limit)
        self._generation += 1
        generation = self._generation
        try:
            comments = self.client.fetch_comments(limit)
        except BackendError as e:
            if generation != self._generation:
                logger.debug("Dropping failure of stale load #%d: %s", generation, e)
                return False
            logger.warning("Loading comments failed: %s", e)
            self.notify(LOAD_ERROR.format(error_message(e)))
            return False

        if generation != self._generation:
            logger.debug("Dropping stale load #%d (latest is #%d)", generation, self._generation)
            return False
        staged = [format_comment(i, c) for i, c in enumerate(comments, start=1)]
        self.panel.replace(staged)
        logger.info("Rendered %d comment(s) with limit %d", len(staged), limit)
        return True

    def refresh(self) -> bool:
        return self.load_comments()

    def update_preference(self, new_limit) -> bool:
        self.preference = self.normalize_limit(new_limit)
        return self.load_comments(self.preference)

    def delete_all_comments(self) -> bool:
        try:
            self.client.delete_all()
        except BackendError as e:
            logger.warning("Deleting comments failed: %s", e)
            self.notify(DELETE_FAILED)
            return False
        self.notify(DELETE_OK)
        self.load_comments()
        return True

    def submit_comment(self, text: str) -> bool:
        text = (text or "").strip()
        if not text:
            self.notify(POST_EMPTY)
            return False
        try:
            self.client.add_comment(text)
        except BackendError as e:
            logger.warning("Posting comment failed: %s", e)
            self.notify(POST_FAILED)
            return False
        self.load_comments()
        return True


def create_controller(settings: Settings, notify: Callable[[str], object],
                      client: Optional[CommentsClient] = None) -> CommentPanelController:
    """Build the page's controller; with auto-refresh on, the refresh loop makes the first load."""
    client = client or CommentsClient(settings.backend_url, timeout=settings.request_timeout)
    controller = CommentPanelController(client, notify=notify, default_limit=settings.default_max_comments)
    if not settings.refresh_seconds:
        controller.load_comments()
    return controller
