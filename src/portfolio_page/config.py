from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BACKEND_URL = "http://localhost:8080"
DEFAULT_MAX_COMMENTS = 10
DEFAULT_TIMEOUT = 10.0
HAPPINESS_PATH = "/static/data/happiest_countries.json"


@dataclass(frozen=True)
class Settings:
    backend_url: str = DEFAULT_BACKEND_URL
    default_max_comments: int = DEFAULT_MAX_COMMENTS
    request_timeout: float = DEFAULT_TIMEOUT
    happiness_source: Optional[str] = None
    refresh_seconds: int = 0
    log_level: str = "INFO"

    @property
    def happiness_url(self) -> str:
        return self.happiness_source or self.backend_url.rstrip("/") + HAPPINESS_PATH


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(0, value)


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def load_settings() -> Settings:
    """Read page settings from the environment.

    Environment variables: PORTFOLIO_BACKEND_URL, PORTFOLIO_DEFAULT_MAX_COMMENTS,
    PORTFOLIO_REQUEST_TIMEOUT, PORTFOLIO_HAPPINESS_SOURCE, PORTFOLIO_REFRESH_SECONDS,
    PORTFOLIO_LOG_LEVEL. Unparseable numbers fall back to their defaults.
    """
    return Settings(
        backend_url=(os.getenv("PORTFOLIO_BACKEND_URL") or DEFAULT_BACKEND_URL).strip(),
        default_max_comments=_env_int("PORTFOLIO_DEFAULT_MAX_COMMENTS", DEFAULT_MAX_COMMENTS),
        request_timeout=_env_float("PORTFOLIO_REQUEST_TIMEOUT", DEFAULT_TIMEOUT),
        happiness_source=(os.getenv("PORTFOLIO_HAPPINESS_SOURCE") or "").strip() or None,
        refresh_seconds=_env_int("PORTFOLIO_REFRESH_SECONDS", 0),
        log_level=(os.getenv("PORTFOLIO_LOG_LEVEL") or "INFO").strip().upper(),
    )
