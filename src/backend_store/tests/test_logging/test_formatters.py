import json
import logging
import sys

from backend_store.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record():
    return logging.LogRecord("backend_store", logging.INFO, __file__, 10, "repo.create.success", (), None)


def test_json_formatter_includes_extras():
    rec = make_record()
    rec.model = "Client"
    rec.duration_ms = 3
    rec.request_id = "req-1"

    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "repo.create.success"
    assert data["level"] == "INFO"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert data["request_id"] == "req-1"
    assert data["model"] == "Client"
    assert data["duration_ms"] == 3
    assert "version" in data
    assert "timestamp" in data


def test_json_formatter_stringifies_unserializable_extras():
    rec = make_record()

    class Opaque:
        def __repr__(self):
            return "<Opaque>"

    rec.obj = Opaque()

    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))

    assert data["obj"] == "<Opaque>"


def test_json_formatter_keeps_traceback():
    try:
        raise ValueError("bad value")
    except ValueError:
        rec = logging.LogRecord("backend_store", logging.ERROR, __file__, 1, "failed", (), None)
        rec.exc_info = sys.exc_info()

    data = json.loads(JsonFormatter(env="dev").format(rec))

    assert "ValueError: bad value" in data["exc_info"]


def test_color_formatter_line_layout():
    rec = make_record()
    rec.request_id = "rid-9"

    line = ColorFormatter().format(rec)

    assert "rid-9" in line
    assert line.endswith("repo.create.success")
