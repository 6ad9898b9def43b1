"""Centralize defaults and environment lookups for the weather widget."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
_DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
_DEFAULT_STORAGE_PATH = "data/local_storage.json"
_RECENT_SEARCH_KEY = "weatherSearches"
_RECENT_SEARCH_LIMIT = 5
_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_SEARCH_LOG_ENABLED: bool = True
_DEFAULT_LOG_DIR = "logs"
_SEARCH_LOG_FILENAME = "searches.jsonl"
_DEFAULT_LOG_MAX_BYTES = 1_000_000
_DEFAULT_LOG_BACKUP_COUNT = 5
_DEFAULT_WEB_UI_HOST = "127.0.0.1"
_DEFAULT_WEB_UI_PORT = 9000
_VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

# ---------------------------------------------------------------------------
# Accessors for static defaults
# ---------------------------------------------------------------------------
def get_recent_search_key() -> str:
    """Return the storage slot name holding the recent-search list."""

    return _RECENT_SEARCH_KEY


def get_recent_search_limit() -> int:
    """Return how many recent searches are kept."""

    return _RECENT_SEARCH_LIMIT

# ---------------------------------------------------------------------------
# Environment-derived settings
# ---------------------------------------------------------------------------
def _parse_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in {"0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def get_geocoding_url(env: Dict[str, str] | None = None) -> str:
    """Return the geocoding search endpoint.

    Args:
        env: Optional mapping used instead of ``os.environ`` to simplify testing.
    """

    source = env if env is not None else os.environ
    return source.get("WEATHER_GEOCODING_URL") or _DEFAULT_GEOCODING_URL


def get_forecast_url(env: Dict[str, str] | None = None) -> str:
    """Return the current-conditions forecast endpoint."""

    source = env if env is not None else os.environ
    return source.get("WEATHER_FORECAST_URL") or _DEFAULT_FORECAST_URL


def get_storage_path(env: Dict[str, str] | None = None) -> Path:
    """Return the JSON file backing the durable key-value slots."""

    source = env if env is not None else os.environ
    override = source.get("WEATHER_STORAGE_PATH")
    return Path(override) if override else Path(_DEFAULT_STORAGE_PATH)


def get_http_timeout(env: Dict[str, str] | None = None) -> float | None:
    """Return the HTTP timeout in seconds, or ``None`` to wait indefinitely."""

    source = env if env is not None else os.environ
    raw = source.get("WEATHER_HTTP_TIMEOUT")
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def get_log_level(env: Dict[str, str] | None = None) -> str:
    source = env if env is not None else os.environ
    raw = (source.get("LOG_LEVEL") or _DEFAULT_LOG_LEVEL).strip().upper()
    return raw if raw in _VALID_LOG_LEVELS else _DEFAULT_LOG_LEVEL


def is_search_log_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether search outcomes are appended to the JSONL log."""

    source = env if env is not None else os.environ
    return _parse_bool(source.get("SEARCH_LOG_ENABLED"), _DEFAULT_SEARCH_LOG_ENABLED)


def get_log_dir(env: Dict[str, str] | None = None) -> Path:
    source = env if env is not None else os.environ
    override = source.get("LOG_DIR")
    return Path(override) if override else Path(_DEFAULT_LOG_DIR)


def get_search_log_path(env: Dict[str, str] | None = None) -> Path:
    """Return the full path for the search log JSONL file."""

    return get_log_dir(env) / _SEARCH_LOG_FILENAME


def get_log_max_bytes(env: Dict[str, str] | None = None) -> int:
    """Return the maximum size in bytes before rotating log files."""

    source = env if env is not None else os.environ
    raw = source.get("LOG_MAX_BYTES")
    if raw is None:
        return _DEFAULT_LOG_MAX_BYTES
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_LOG_MAX_BYTES
    return max(value, 0)


def get_log_backup_count(env: Dict[str, str] | None = None) -> int:
    """Return the number of rotated log files to retain."""

    source = env if env is not None else os.environ
    raw = source.get("LOG_BACKUP_COUNT")
    if raw is None:
        return _DEFAULT_LOG_BACKUP_COUNT
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_LOG_BACKUP_COUNT
    return max(value, 0)


def get_web_ui_host(env: Dict[str, str] | None = None) -> str:
    source = env if env is not None else os.environ
    return source.get("WEB_UI_HOST", _DEFAULT_WEB_UI_HOST)


def get_web_ui_port(env: Dict[str, str] | None = None) -> int:
    source = env if env is not None else os.environ
    raw = source.get("WEB_UI_PORT")
    if raw is None:
        return _DEFAULT_WEB_UI_PORT
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_WEB_UI_PORT
    return value if 0 < value <= 65535 else _DEFAULT_WEB_UI_PORT
