# src/glogger/core/logging/models.py
"""
Structured fields attached to the request lifecycle entries.

The models are frozen pydantic models: a snapshot is captured once and never
mutated afterwards. Python attribute names are snake_case; the serialized keys
are the camelCase aliases, which is what JsonFormatter emits
(`model_dump(mode="json", by_alias=True)`).

Serialized shape of a lifecycle entry's structured fields:

    "http": {
        "request": {"path": .., "method": .., "contentType": .., "query": ..,
                    "scheme": .., "protocol": .., "userAgent": ..},
        "response": null | {"statusCode": <int>, "responseTime": <ms>}
    },
    "host": {"hostname": .., "ip": .., "forwardedHostname": ..}
"""

from pydantic import BaseModel, ConfigDict, Field


class Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RequestSnapshot(Snapshot):
    path: str
    method: str
    content_type: str = Field(default="", alias="contentType")
    query: str = ""
    scheme: str = ""
    protocol: str = ""
    user_agent: str = Field(default="", alias="userAgent")


class ResponseSnapshot(Snapshot):
    status_code: int = Field(alias="statusCode")
    # elapsed milliseconds, measured with a monotonic clock
    response_time: float = Field(alias="responseTime", ge=0)


class HTTPFields(Snapshot):
    request: RequestSnapshot
    # None on the "incoming" entry, populated on the "completed" entry
    response: ResponseSnapshot | None = None


class HostInfo(Snapshot):
    hostname: str = ""
    ip: str = ""
    forwarded_hostname: str = Field(default="", alias="forwardedHostname")
