from __future__ import annotations

import os
from urllib.parse import urlparse

from .models import Config


DEFAULT_API_BASE_URL = "http://localhost:10000"


def _read_positive_int(env_name: str, default: int) -> int:
    raw = os.getenv(env_name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def load_config() -> Config:
    base_url = os.getenv("VT_API_BASE_URL", "").strip() or DEFAULT_API_BASE_URL
    return Config(
        api_base_url=base_url.rstrip("/"),
        poll_interval_ms=_read_positive_int("VT_POLL_INTERVAL_MS", 2000),
        request_timeout_sec=_read_positive_int("VT_REQUEST_TIMEOUT_SEC", 15),
        max_cookie_file_mb=_read_positive_int("VT_MAX_COOKIE_FILE_MB", 100),
    )


def validate_runtime(config: Config) -> list[str]:
    errors: list[str] = []
    parsed = urlparse(config.api_base_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        errors.append(f"API base URL must be an http/https URL: {config.api_base_url}")
    return errors
