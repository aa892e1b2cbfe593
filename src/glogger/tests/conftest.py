"""
Core pytest configuration for the glogger test suite.

Every test that needs the sink gets a fresh one writing into an in-memory
stream (`log_stream`), so assertions can parse exactly what would have been
written to stderr: one JSON object per line.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import io
import json
import logging
import sys
from pathlib import Path

# -------------------------------
# Early logging tuning
# -------------------------------
# Silence chatty third-party loggers before anything imports them.
NOISY_LOGGERS = (
    "asyncio",
    "httpx",
    "httpcore",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# ------------------------------------------------------------------------------------------------
# PATH PATCHING
# ------------------------------------------------------------------------------------------------

# Ensure 'src' on sys.path so `import glogger...` works when running tests without installing
SRC = Path(__file__).resolve().parents[2]
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from fastapi import FastAPI

from glogger.config.settings import Settings
from glogger.core.logging.builder import setup_logging
from glogger.core.logging.middleware import RequestLoggingMiddleware


def make_settings(**overrides) -> Settings:
    """Settings with explicit values so the host environment cannot leak into tests."""
    values = {
        "ENV": "testing",
        "LOG_LEVEL": "trace",
        "LOG_FORMAT": "json",
        "LOG_OUTPUT": "stderr",
        "LOG_REDACT": True,
        "LOGGER_NAME": "glogger",
        "REQUEST_ID_HEADER": "x-request-id",
        "REQUEST_ID_ECHO": False,
    }
    values.update(overrides)
    return Settings(**values)


def read_entries(stream: io.StringIO) -> list[dict]:
    """Parse every line written to the sink; fails the test on a non-JSON line."""
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


# ------------------------------------------------------------------------------------------------
# SINK FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def sink(log_stream: io.StringIO) -> logging.Logger:
    """The glogger sink at trace level, writing JSON lines into `log_stream`."""
    return setup_logging(make_settings(), stream=log_stream)


@pytest.fixture()
def app(sink: logging.Logger) -> FastAPI:
    """A FastAPI app with the lifecycle middleware installed; tests add their own routes."""
    application = FastAPI()
    application.add_middleware(RequestLoggingMiddleware, logger=sink)
    return application
