"""Persistent JSON config helpers.

Stores search tuning (debounce delay, page size, request timeout), the API
base URL and the Pygments style. All access is defensive: malformed or
missing config falls back safely.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir

from ..directory.client import DEFAULT_API_BASE
from ..search.settings import (
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    SearchSettings,
)

APP_NAME = "lazyhub"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
TOKEN_ENV_VAR = "GITHUB_TOKEN"
DEFAULT_STYLE = "monokai"
MAX_PAGE_SIZE = 100


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _positive_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None


def load_debounce_seconds() -> float:
    """Return configured debounce delay; ``debounce_ms`` is stored in milliseconds."""
    value = _positive_number(load_config().get("debounce_ms"))
    return DEFAULT_DEBOUNCE_SECONDS if value is None else value / 1000.0


def load_page_size() -> int:
    value = load_config().get("page_size")
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_PAGE_SIZE
    if value < 1 or value > MAX_PAGE_SIZE:
        return DEFAULT_PAGE_SIZE
    return value


def load_request_timeout_seconds() -> float:
    value = _positive_number(load_config().get("request_timeout_seconds"))
    return DEFAULT_REQUEST_TIMEOUT_SECONDS if value is None else value


def load_api_base() -> str:
    value = load_config().get("api_base")
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_API_BASE
    return value.strip()


def load_style_name() -> str:
    value = load_config().get("style")
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_STYLE
    return value.strip()


def save_style_name(style: str) -> None:
    stripped = str(style).strip()
    if not stripped:
        return
    config = load_config()
    config["style"] = stripped
    save_config(config)


def load_token() -> str | None:
    """Return the API token from the environment, if set."""
    token = os.environ.get(TOKEN_ENV_VAR, "").strip()
    return token or None


def load_search_settings(
    *,
    debounce_seconds: float | None = None,
    page_size: int | None = None,
    request_timeout_seconds: float | None = None,
) -> SearchSettings:
    """Build settings from config, letting explicit arguments win."""
    return SearchSettings(
        debounce_seconds=load_debounce_seconds() if debounce_seconds is None else debounce_seconds,
        page_size=load_page_size() if page_size is None else page_size,
        request_timeout_seconds=(
            load_request_timeout_seconds() if request_timeout_seconds is None else request_timeout_seconds
        ),
    )
