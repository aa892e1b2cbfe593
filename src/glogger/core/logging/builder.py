# src/glogger/core/logging/builder.py
"""
Sink construction: make_dict_config(settings) + setup_logging(settings).

The sink is a named stdlib logger (settings.LOGGER_NAME, "glogger" by default)
with a single line-atomic handler. Everything the middleware and the bound
request loggers emit goes through it.

  - Minimum severity: settings.LOG_LEVEL is applied to the logger, so records
    below it are rejected by Logger.isEnabledFor() before a LogRecord is even
    built (and long before formatting).
  - Destination: settings.LOG_OUTPUT ("stderr" by default, "stdout", or a file
    path), or an explicit `stream` object passed to setup_logging().
  - Format: "json" (newline-delimited JSON) or "text" (ColorFormatter).

The logger does not propagate to the root logger, so root handlers never see
lifecycle entries a second time. Note that dictConfig flushes and closes every
handler already registered in the process, including ones the application
attached to its own loggers. Those stay attached but are closed, so call
setup_logging() before the application installs its own handlers.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import IO, Optional

from glogger.config.settings import Settings, get_settings
from .filters import RedactFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import get_console_handler, get_file_handler
from .levels import level_from_name


def make_dict_config(settings: Settings, stream: Optional[IO[str]] = None) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "json" and "text"
      - filters: "redact"
      - handlers: "console" (stream) or "file" depending on LOG_OUTPUT / stream
      - loggers: the sink logger only; existing loggers are left alone
    """
    if stream is not None or settings.LOG_TO_STREAM:
        handlers = {"console": get_console_handler(settings, stream)}
    else:
        handlers = {"file": get_file_handler(settings)}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JsonFormatter},
            "text": {"()": ColorFormatter},
        },
        "filters": {
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": {
            settings.LOGGER_NAME: {
                "handlers": list(handlers.keys()),
                "level": level_from_name(settings.LOG_LEVEL),
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings | None = None, stream: Optional[IO[str]] = None) -> logging.Logger:
    """
    Configure the sink and return its logger.

    Steps:
      1. Ensure the parent directory exists when writing to a file.
      2. Apply dictConfig(make_dict_config(settings, stream)).
      3. Return logging.getLogger(settings.LOGGER_NAME).

    Calling it again reconfigures the same logger (handlers are replaced, not added).
    """
    settings = settings or get_settings()

    if stream is None and not settings.LOG_TO_STREAM:
        Path(settings.LOG_OUTPUT).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings, stream))
    return logging.getLogger(settings.LOGGER_NAME)
