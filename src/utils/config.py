from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_API_URL = "https://fakestoreapi.com"
DEFAULT_PAGE_SIZE = 5
DEFAULT_EXPORT_DIR = "exports"
DEFAULT_SESSION_DB = "data/session.sqlite"
DEFAULT_LOGIN_DELAY = 1.0


def _env(key: str, default: str = "") -> str:
    """Read env var and strip surrounding quotes/whitespace."""
    val = os.getenv(key)
    if val is None:
        return default
    return val.strip().strip('"').strip("'")


def _env_int(key: str, default: int, minimum: int = 1) -> int:
    try:
        val = int(_env(key, str(default)))
    except ValueError:
        return default
    return val if val >= minimum else default


def _env_float(key: str, default: Optional[float]) -> Optional[float]:
    raw = _env(key)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val >= 0 else default


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for the admin console.

    Fields:
      - api_url: base url of the FakeStore API, without trailing slash
      - http_timeout: seconds per request, None waits forever
      - page_size: rows per table page
      - export_dir: where CSV exports are written
      - session_db: sqlite file holding the persisted login
      - login_delay: artificial delay of the mock login, in seconds
    """

    api_url: str = DEFAULT_API_URL
    http_timeout: Optional[float] = None
    page_size: int = DEFAULT_PAGE_SIZE
    export_dir: str = DEFAULT_EXPORT_DIR
    session_db: str = DEFAULT_SESSION_DB
    login_delay: float = DEFAULT_LOGIN_DELAY


def load_settings(use_dotenv: bool = True) -> Settings:
    if use_dotenv:
        load_dotenv(override=False)

    return Settings(
        api_url=(_env("FAKESTORE_API_URL") or DEFAULT_API_URL).rstrip("/"),
        http_timeout=_env_float("FAKESTORE_HTTP_TIMEOUT", None),
        page_size=_env_int("ADMIN_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        export_dir=_env("ADMIN_EXPORT_DIR") or DEFAULT_EXPORT_DIR,
        session_db=_env("ADMIN_SESSION_DB") or DEFAULT_SESSION_DB,
        login_delay=_env_float("ADMIN_LOGIN_DELAY", DEFAULT_LOGIN_DELAY),
    )
