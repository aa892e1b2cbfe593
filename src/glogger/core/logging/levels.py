# src/glogger/core/logging/levels.py
"""
Severity model.

Entries are emitted through the standard `logging` machinery, so our five
severities are mapped onto stdlib level numbers. `trace` has no stdlib
equivalent and is registered here as level 5 (below DEBUG).

| name  | levelno |
| ----- | ------- |
| trace | 5       |
| debug | 10      |
| info  | 20      |
| warn  | 30      |
| error | 40      |

CRITICAL (50) is only reachable through plain stdlib loggers and is rendered
as "fatal".
"""

import logging

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

LEVEL_NAMES: dict[int, str] = {levelno: name for name, levelno in LEVELS.items()}
LEVEL_NAMES[logging.CRITICAL] = "fatal"


def level_from_name(name: str) -> int:
    """
    Return the stdlib level number for a severity name.

    Raises:
        ValueError: if the name is not one of trace, debug, info, warn, error.
    """
    try:
        return LEVELS[name.lower()]
    except KeyError:
        raise ValueError(f"unknown log level: {name!r}") from None


def level_name(levelno: int, default: str | None = None) -> str:
    """Return the serialized severity name for a stdlib level number."""
    if levelno in LEVEL_NAMES:
        return LEVEL_NAMES[levelno]
    if default is not None:
        return default
    return logging.getLevelName(levelno).lower()
