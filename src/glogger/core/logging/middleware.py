# src/glogger/core/logging/middleware.py
"""
Request lifecycle logging middleware for ASGI applications (FastAPI / Starlette).

Purpose
-------
Every HTTP request gets its own logger, bound with a correlation id and the
host/network information of the request, and produces exactly two lifecycle
entries through it:

  - "Incoming Request" with http.response = null, before the app runs
  - "Incoming Request" with http.response = {statusCode, responseTime}, after it returns

Handler code can fetch the same logger with `get_logger(request)` (or the
`RequestLoggerDep` FastAPI dependency); anything it logs carries the same
correlationId as the two lifecycle entries.

How it works
------------
1. Correlation id: the `x-request-id` header (configurable) is used verbatim
   when present and non-empty, otherwise a fresh UUID4 string is generated.
2. Host info: hostname from the Host header (port stripped), client ip from the
   first X-Forwarded-For entry or the connection address, forwarded hostname
   from X-Forwarded-Host. Missing headers become "".
3. The base logger is bound with {correlationId, host} and the bound logger is
   placed in a derived scope (context.bind_logger) passed to the app.
4. The clock starts (time.perf_counter, monotonic) and the incoming entry is emitted.
5. The app runs with a `send` wrapper that records the status of
   `http.response.start`. 200 is assumed when the app never sends one.
6. The completed entry is emitted with the status and elapsed milliseconds.

This is a pure ASGI middleware rather than a BaseHTTPMiddleware: the app must
receive a derived scope, and the status has to be observed on the wire.

Failure semantics
-----------------
Logging never changes the response. Handler errors are absorbed by the sink
(handlers.py); anything raised while building or emitting a lifecycle entry is
reported on this module's logger at debug level and dropped. Exceptions raised
by the app itself are recorded as status 500 (unless a response was already
started) and re-raised unchanged. A request cancelled before a response
started (client gone, server shutting down) is recorded as 499.

Usage
-----
    logger = setup_logging(Settings(LOG_LEVEL="trace"))

    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware, logger=logger)

    # or wrap any ASGI app:
    app = logging_middleware(logger)(app)
"""

import asyncio
import logging
import time
import uuid
from typing import Callable
from urllib.parse import urlsplit

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from glogger.config.settings import Settings, get_settings
from .adapters import RequestLogger
from .context import bind_logger
from .levels import TRACE
from .models import HostInfo, HTTPFields, RequestSnapshot, ResponseSnapshot

log = logging.getLogger(__name__)

DEFAULT_REQUEST_ID_HEADER = "x-request-id"
LIFECYCLE_MESSAGE = "Incoming Request"
STATUS_APP_ERROR = 500
STATUS_CLIENT_CLOSED = 499  # request cancelled before a response started


def new_request_id() -> str:
    return str(uuid.uuid4())


def parse_hostname(host: str) -> str:
    """Hostname part of a Host header value, port stripped. "" when it does not parse."""
    try:
        return urlsplit(f"//{host}").hostname or ""
    except ValueError:
        # e.g. an unclosed IPv6 bracket
        return ""


def extract_host(request: Request) -> HostInfo:
    """Build HostInfo from the Host header, the connection and the forwarding headers."""
    hostname = parse_hostname(request.headers.get("host", ""))

    forwarded_for = request.headers.get("x-forwarded-for", "")
    ip = forwarded_for.split(",")[0].strip()
    if not ip and request.client is not None:
        ip = request.client.host or ""

    return HostInfo(
        hostname=hostname,
        ip=ip,
        forwarded_hostname=request.headers.get("x-forwarded-host", ""),
    )


def extract_request(request: Request) -> RequestSnapshot:
    """Capture the request attributes logged on both lifecycle entries."""
    scope = request.scope
    query = scope.get("query_string", b"").decode("latin-1")
    path = scope.get("path", "")
    if query:
        path = f"{path}?{query}"

    return RequestSnapshot(
        path=path,
        method=scope.get("method", ""),
        content_type=request.headers.get("content-type", ""),
        query=query,
        scheme=scope.get("scheme", "http"),
        protocol=f"HTTP/{scope.get('http_version', '1.1')}",
        user_agent=request.headers.get("user-agent", ""),
    )


class RequestLoggingMiddleware:
    """
    ASGI middleware emitting the incoming/completed entries for every HTTP request.

    Args:
        app: the wrapped ASGI application.
        logger: the sink logger (from setup_logging) or an already bound RequestLogger.
        header_name: request header carrying an upstream correlation id.
        level: severity of the lifecycle entries (trace by default).
        echo_request_id: also return the correlation id in `header_name` on the response.
        id_factory: generator for correlation ids when the header is absent.
    """

    def __init__(
        self,
        app: ASGIApp,
        logger: logging.Logger | RequestLogger,
        *,
        header_name: str = DEFAULT_REQUEST_ID_HEADER,
        level: int = TRACE,
        echo_request_id: bool = False,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.app = app
        self.logger = logger if isinstance(logger, RequestLogger) else RequestLogger(logger)
        self.header_name = header_name.lower()
        self.level = level
        self.echo_request_id = echo_request_id
        self.id_factory = id_factory or new_request_id

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)

        # 1) Correlation id: upstream header if non-empty, else a fresh one.
        correlation_id = request.headers.get(self.header_name) or self.id_factory()

        # 2-3) Bind the per-request logger and hand it to the app through the scope.
        logger = self.logger.bind(correlationId=correlation_id, host=extract_host(request))
        scope = bind_logger(scope, logger)

        # 4) Start the clock just before the incoming entry.
        snapshot = extract_request(request)
        start = time.perf_counter()
        self._emit(logger, HTTPFields(request=snapshot, response=None))

        status_code: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                if self.echo_request_id:
                    message.setdefault("headers", [])
                    headers = MutableHeaders(scope=message)
                    if self.header_name not in headers:
                        headers.append(self.header_name, correlation_id)
            await send(message)

        # 5-6) Delegate, then emit the completed entry whatever happened.
        try:
            await self.app(scope, receive, send_wrapper)
        except asyncio.CancelledError:
            if status_code is None:
                status_code = STATUS_CLIENT_CLOSED
            raise
        except BaseException:
            if status_code is None:
                status_code = STATUS_APP_ERROR
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self._emit(logger, HTTPFields(
                request=snapshot,
                response=ResponseSnapshot(
                    status_code=status_code if status_code is not None else 200,
                    response_time=elapsed_ms,
                ),
            ))

    def _emit(self, logger: RequestLogger, http: HTTPFields) -> None:
        try:
            logger.log(self.level, LIFECYCLE_MESSAGE, extra={"http": http})
        except Exception:
            # logging must never break the request
            log.debug("failed to emit request lifecycle entry", exc_info=True)


def logging_middleware(
    logger: logging.Logger | RequestLogger, settings: Settings | None = None
) -> Callable[[ASGIApp], ASGIApp]:
    """
    Return a factory wrapping an ASGI app with RequestLoggingMiddleware.

    Header name and echo behaviour come from settings (REQUEST_ID_HEADER, REQUEST_ID_ECHO).
    """
    settings = settings or get_settings()

    def factory(app: ASGIApp) -> ASGIApp:
        return RequestLoggingMiddleware(
            app,
            logger,
            header_name=settings.REQUEST_ID_HEADER,
            echo_request_id=settings.REQUEST_ID_ECHO,
        )

    return factory
