# src/glogger/tests/test_config/test_settings.py
import pytest
from pydantic import ValidationError

from glogger.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ENV", "LOG_LEVEL", "LOG_FORMAT", "LOG_OUTPUT", "LOG_REDACT",
                 "LOGGER_NAME", "REQUEST_ID_HEADER", "REQUEST_ID_ECHO"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings()
    assert settings.LOG_LEVEL == "info"
    assert settings.LOG_FORMAT == "json"
    assert settings.LOG_OUTPUT == "stderr"
    assert settings.LOG_TO_STREAM is True
    assert settings.REQUEST_ID_HEADER == "x-request-id"
    assert settings.REQUEST_ID_ECHO is False


@pytest.mark.parametrize("raw,expected", [
    ("TRACE", "trace"),
    (" Debug ", "debug"),
    ("WARNING", "warn"),
    ("warn", "warn"),
    ("error", "error"),
])
def test_log_level_is_normalized(raw, expected):
    assert Settings(LOG_LEVEL=raw).LOG_LEVEL == expected


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(LOG_LEVEL="verbose")


def test_values_read_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "TEXT")
    monkeypatch.setenv("REQUEST_ID_HEADER", "X-Correlation-ID")
    settings = Settings()
    assert settings.LOG_LEVEL == "debug"
    assert settings.LOG_FORMAT == "text"
    assert settings.REQUEST_ID_HEADER == "x-correlation-id"


def test_file_output_is_not_a_stream(tmp_path):
    assert Settings(LOG_OUTPUT=str(tmp_path / "app.log")).LOG_TO_STREAM is False
