# src/glogger/core/logging/filters.py
"""
Logging filters

RedactFilter scrubs sensitive structured fields before a record is formatted.

Structured fields travel on `record.fields` (see adapters.py), so that is the
mapping this filter inspects. Only top-level keys are checked; values nested
inside pydantic models (the lifecycle `http`/`host` fields) never hold
credentials, because the middleware does not capture request headers other
than content-type, user-agent and the forwarding headers.

Installed through dictConfig (builder.py) when LOG_REDACT is true:

     "filters": {"redact": {"()": RedactFilter}},
     "handlers": {"console": {..., "filters": ["redact"]}}

The filter always returns True: it rewrites records, it never drops them.
"""

import logging
from logging import LogRecord

from .formatters import FIELDS_ATTR, get_fields

REDACTED = "***REDACTED***"


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "ssn", "authorization", "cookie"}

    def filter(self, record: LogRecord) -> bool:
        fields = get_fields(record)
        if any(key.lower() in self.SENSITIVE for key in fields):
            # copy: the same mapping may be shared with other handlers
            setattr(record, FIELDS_ATTR, {
                key: REDACTED if key.lower() in self.SENSITIVE else value
                for key, value in fields.items()
            })
        return True
