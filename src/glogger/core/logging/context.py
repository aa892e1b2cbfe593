# src/glogger/core/logging/context.py
"""
Request-scoped logger propagation.

The per-request logger travels inside the ASGI `scope` of the request, not in
a module-level variable or a contextvar:

  - bind_logger(scope, logger) returns a NEW scope dict carrying the logger;
    the scope it was given is left untouched.
  - Everything downstream receives the derived scope (routers, mounts and
    sub-applications copy or update it in place), so child scopes inherit the
    logger, while unrelated requests, which have their own scope, never see it.
  - get_logger(...) accepts a scope mapping or any Starlette HTTPConnection
    (Request, WebSocket) and falls back to a discarding logger, so handler code
    can log unconditionally.

    @app.get("/users/{user_id}")
    async def read_user(user_id: int, request: Request):
        get_logger(request).info("loading user", extra={"userId": user_id})
"""

from collections.abc import Mapping, MutableMapping
from typing import Any

from starlette.requests import HTTPConnection

from .adapters import NULL_LOGGER, RequestLogger

LOGGER_SCOPE_KEY = "glogger.logger"


def bind_logger(scope: Mapping[str, Any], logger: RequestLogger) -> MutableMapping[str, Any]:
    """Return a copy of `scope` carrying `logger`."""
    return {**scope, LOGGER_SCOPE_KEY: logger}


def get_logger(context: HTTPConnection | Mapping[str, Any] | None) -> RequestLogger:
    """
    Return the logger bound to a request, or NULL_LOGGER when there is none.

    Never raises: an unknown context type is treated as "no logger bound".
    """
    scope = context.scope if isinstance(context, HTTPConnection) else context
    if not isinstance(scope, Mapping):
        return NULL_LOGGER
    logger = scope.get(LOGGER_SCOPE_KEY)
    if isinstance(logger, RequestLogger):
        return logger
    return NULL_LOGGER
