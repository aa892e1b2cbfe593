# src/glogger/tests/test_logging/test_formatters.py
import json
import logging
import sys

import pytest

from glogger.core.logging.formatters import ColorFormatter, JsonFormatter
from glogger.core.logging.levels import TRACE
from glogger.core.logging.models import HostInfo, HTTPFields, RequestSnapshot, ResponseSnapshot
from glogger.exceptions import SerializationError


def make_record(msg="Incoming Rquest", level=logging.INFO, fields=None, exc_info=None):
    # name, level, pathname, lineno, msg, args, exc_info
    rec = logging.LogRecord("glogger", level, __file__, 1, msg, None, exc_info)
    if fields is not None:
        rec.fields = fields
    return rec


def test_json_formatter_minimal_entry():
    rec = make_record()
    out = JsonFormatter().format(rec)
    expected = '{"level":"info","message":"Incoming Rquest","time":%d}\n' % int(rec.created)
    assert out == expected


def test_json_formatter_fields_are_top_level_and_ordered():
    rec = make_record(fields={"correlationId": "abc-123", "attempt": 2})
    out = JsonFormatter().format(rec)
    assert out.endswith("}\n")
    assert out.count("\n") == 1
    data = json.loads(out)
    assert list(data) == ["level", "message", "time", "correlationId", "attempt"]
    assert "fields" not in data


def test_json_formatter_round_trip_has_exactly_declared_keys():
    fields = {"a": 1, "b": [1, 2], "c": {"nested": None}, "d": ""}
    data = json.loads(JsonFormatter().format(make_record(fields=fields)))
    assert set(data) == {"level", "message", "time"} | set(fields)


def test_json_formatter_is_deterministic():
    rec = make_record(fields={"z": 1, "a": 2, "m": {"y": 1, "b": 2}})
    fmt = JsonFormatter()
    assert fmt.format(rec) == fmt.format(rec)


def test_json_formatter_serializes_models_by_alias():
    request = RequestSnapshot(path="/a?b=1", method="GET", content_type="text/plain", query="b=1",
                              scheme="http", protocol="HTTP/1.1", user_agent="curl/8")
    rec = make_record(level=TRACE, fields={
        "host": HostInfo(hostname="localhost", ip="127.0.0.1", forwarded_hostname="edge"),
        "http": HTTPFields(request=request, response=None),
    })
    data = json.loads(JsonFormatter().format(rec))

    assert data["level"] == "trace"
    assert data["host"] == {"hostname": "localhost", "ip": "127.0.0.1", "forwardedHostname": "edge"}
    assert data["http"]["response"] is None
    assert data["http"]["request"] == {
        "path": "/a?b=1", "method": "GET", "contentType": "text/plain", "query": "b=1",
        "scheme": "http", "protocol": "HTTP/1.1", "userAgent": "curl/8",
    }


def test_json_formatter_response_snapshot():
    request = RequestSnapshot(path="/", method="GET")
    rec = make_record(fields={"http": HTTPFields(
        request=request, response=ResponseSnapshot(status_code=201, response_time=1.5))})
    data = json.loads(JsonFormatter().format(rec))
    assert data["http"]["response"] == {"statusCode": 201, "responseTime": 1.5}


@pytest.mark.parametrize("levelno,name", [
    (TRACE, "trace"),
    (logging.DEBUG, "debug"),
    (logging.INFO, "info"),
    (logging.WARNING, "warn"),
    (logging.ERROR, "error"),
    (logging.CRITICAL, "fatal"),
])
def test_json_formatter_level_names(levelno, name):
    data = json.loads(JsonFormatter().format(make_record(level=levelno)))
    assert data["level"] == name


def test_json_formatter_renames_clashing_fields():
    rec = make_record(fields={"level": "custom", "time": 0})
    data = json.loads(JsonFormatter().format(rec))
    assert data["level"] == "info"
    assert data["time"] == int(rec.created)
    assert data["fields.level"] == "custom"
    assert data["fields.time"] == 0


def test_json_formatter_non_serializable_field_raises():
    class X:
        pass

    rec = make_record(fields={"ok": 1, "obj": X()})
    with pytest.raises(SerializationError) as excinfo:
        JsonFormatter().format(rec)
    assert excinfo.value.fields == ["obj"]


def test_json_formatter_circular_reference_raises():
    cyclic: dict = {}
    cyclic["self"] = cyclic
    with pytest.raises(SerializationError) as excinfo:
        JsonFormatter().format(make_record(fields={"cyclic": cyclic}))
    assert excinfo.value.fields == ["cyclic"]


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_json_formatter_non_finite_float_raises(value):
    # bare NaN/Infinity tokens are not valid JSON
    with pytest.raises(SerializationError) as excinfo:
        JsonFormatter().format(make_record(fields={"ratio": value, "n": 1}))
    assert excinfo.value.fields == ["ratio"]


def test_json_formatter_includes_exception_text():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        rec = make_record(level=logging.ERROR, exc_info=sys.exc_info())
    data = json.loads(JsonFormatter().format(rec))
    assert "RuntimeError: boom" in data["error"]


def test_color_formatter_renders_fields():
    rec = make_record(msg="hello %s", fields={"correlationId": "abc", "n": 3})
    rec.args = ("world",)
    out = ColorFormatter().format(rec)
    assert out.endswith("\n")
    assert "hello world" in out
    assert "info" in out
    assert "correlationId=abc" in out
    assert "n=3" in out


def test_color_formatter_never_raises_on_odd_values():
    class X:
        def __repr__(self):
            return "<X>"

    out = ColorFormatter().format(make_record(fields={"obj": X()}))
    assert "obj=<X>" in out


def test_color_formatter_renders_nan_as_text():
    out = ColorFormatter().format(make_record(fields={"ratio": float("nan")}))
    assert "ratio=nan" in out
