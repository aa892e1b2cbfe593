"""
glogger: structured request-lifecycle logging for ASGI applications.
"""

from glogger.config.settings import Settings, get_settings
from glogger.exceptions import LoggingError, SerializationError
from glogger.core.logging import (
    TRACE,
    RequestLogger,
    RequestLoggingMiddleware,
    RequestLoggerDep,
    bind_logger,
    get_logger,
    get_request_logger,
    logging_middleware,
    setup_logging,
)

__all__ = [
    "Settings", "get_settings",
    "LoggingError", "SerializationError",
    "TRACE", "RequestLogger", "RequestLoggingMiddleware", "RequestLoggerDep",
    "bind_logger", "get_logger", "get_request_logger", "logging_middleware",
    "setup_logging",
]
