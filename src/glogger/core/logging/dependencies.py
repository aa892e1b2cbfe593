from typing import Annotated

from fastapi import Depends, Request

from .adapters import RequestLogger
from .context import get_logger


async def get_request_logger(request: Request) -> RequestLogger:
    # Returns the logger bound by RequestLoggingMiddleware (or the null logger)
    return get_logger(request)


RequestLoggerDep = Annotated[RequestLogger, Depends(get_request_logger)]
