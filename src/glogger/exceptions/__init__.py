# glogger/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   └── base.py                    # LoggingError, SerializationError

from .base import LoggingError, SerializationError

__all__ = ["LoggingError", "SerializationError"]
