# src/glogger/core/logging/
# ├─ __init__.py            # public API
# ├─ levels.py              # trace/debug/info/warn/error <-> stdlib level numbers
# ├─ models.py              # RequestSnapshot, ResponseSnapshot, HTTPFields, HostInfo
# ├─ formatters.py          # JsonFormatter, ColorFormatter
# ├─ filters.py             # RedactFilter
# ├─ handlers.py            # line-atomic handlers + dictConfig handler factories
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ adapters.py            # RequestLogger (bound per-request logger), NullRequestLogger
# ├─ context.py             # bind_logger / get_logger on the ASGI scope
# ├─ middleware.py          # RequestLoggingMiddleware, logging_middleware()
# └─ dependencies.py        # FastAPI dependency for the request logger


from .levels import TRACE, level_from_name, level_name
from .models import HostInfo, HTTPFields, RequestSnapshot, ResponseSnapshot
from .formatters import JsonFormatter, ColorFormatter
from .filters import RedactFilter
from .handlers import LineStreamHandler, LineFileHandler
from .builder import setup_logging, make_dict_config
from .adapters import RequestLogger, NullRequestLogger, NULL_LOGGER
from .context import bind_logger, get_logger
from .middleware import RequestLoggingMiddleware, logging_middleware
from .dependencies import get_request_logger, RequestLoggerDep

__all__ = [
    "TRACE", "level_from_name", "level_name",
    "HostInfo", "HTTPFields", "RequestSnapshot", "ResponseSnapshot",
    "JsonFormatter", "ColorFormatter", "RedactFilter",
    "LineStreamHandler", "LineFileHandler",
    "setup_logging", "make_dict_config",
    "RequestLogger", "NullRequestLogger", "NULL_LOGGER",
    "bind_logger", "get_logger",
    "RequestLoggingMiddleware", "logging_middleware",
    "get_request_logger", "RequestLoggerDep",
]
