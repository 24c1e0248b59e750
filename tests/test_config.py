import pytest

from video_task_client.config import load_config, validate_runtime
from video_task_client.models import Config


def test_defaults_when_env_is_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("VT_API_BASE_URL", "VT_POLL_INTERVAL_MS", "VT_REQUEST_TIMEOUT_SEC", "VT_MAX_COOKIE_FILE_MB"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config == Config(
        api_base_url="http://localhost:10000",
        poll_interval_ms=2000,
        request_timeout_sec=15,
        max_cookie_file_mb=100,
    )


def test_env_overrides_and_invalid_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VT_API_BASE_URL", "https://backend.example.com/")
    monkeypatch.setenv("VT_POLL_INTERVAL_MS", "500")
    monkeypatch.setenv("VT_REQUEST_TIMEOUT_SEC", "-3")
    monkeypatch.setenv("VT_MAX_COOKIE_FILE_MB", "lots")

    config = load_config()

    assert config.api_base_url == "https://backend.example.com"
    assert config.poll_interval_ms == 500
    assert config.request_timeout_sec == 15
    assert config.max_cookie_file_mb == 100


def test_validate_runtime_flags_non_http_base_url() -> None:
    assert validate_runtime(Config(api_base_url="http://localhost:10000")) == []
    errors = validate_runtime(Config(api_base_url="localhost:10000"))
    assert len(errors) == 1
    assert "localhost:10000" in errors[0]
