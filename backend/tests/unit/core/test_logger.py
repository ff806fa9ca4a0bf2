# tests/unit/core/test_logger.py
from __future__ import annotations

import json
import logging

from players_api.core.logger import (
    JSONFormatter,
    RequestIdFilter,
    configure_logging,
    ensure_request_id,
)


def test_configure_logging_sets_level():
    configure_logging("DEBUG")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h.formatter, JSONFormatter) for h in root.handlers)
    configure_logging("WARNING")
    assert root.level == logging.WARNING


def test_json_formatter_includes_known_extras():
    record = logging.LogRecord("players", logging.INFO, __file__, 1, "player.registered", None, None)
    record.player_id = 7
    record.picture_path = "/uploads/x.png"
    record.request_id = "abc"
    record.unrelated = "dropped"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "player.registered"
    assert payload["level"] == "INFO"
    assert payload["player_id"] == 7
    assert payload["picture_path"] == "/uploads/x.png"
    assert payload["request_id"] == "abc"
    assert "unrelated" not in payload


def test_ensure_request_id_is_stable_within_a_request(app):
    with app.test_request_context("/api/players", headers={"X-Correlation-ID": "corr-1"}):
        assert ensure_request_id() == "corr-1"
        assert ensure_request_id() == "corr-1"
    with app.test_request_context("/api/players"):
        generated = ensure_request_id()
        assert generated == ensure_request_id()


def test_unsafe_correlation_header_is_replaced(app):
    for unsafe in ("has spaces", "x" * 200):
        with app.test_request_context("/api/players", headers={"X-Request-ID": unsafe}):
            request_id = ensure_request_id()
        assert request_id != unsafe
        assert len(request_id) == 36


def test_request_id_filter_keeps_explicit_id(app):
    record = logging.LogRecord("players", logging.INFO, __file__, 1, "msg", None, None)
    record.request_id = "from-service"
    with app.test_request_context("/api/players", headers={"X-Request-ID": "from-header"}):
        RequestIdFilter().filter(record)
    assert record.request_id == "from-service"

    bare = logging.LogRecord("players", logging.INFO, __file__, 1, "msg", None, None)
    with app.test_request_context("/api/players", headers={"X-Request-ID": "from-header"}):
        RequestIdFilter().filter(bare)
    assert bare.request_id == "from-header"


def test_json_formatter_accepts_custom_keys():
    record = logging.LogRecord("players", logging.INFO, __file__, 1, "msg", None, None)
    record.player_id = 3
    payload = json.loads(JSONFormatter(extra_keys=()).format(record))
    assert "player_id" not in payload


def test_access_line_logged_per_request(client, caplog):
    caplog.set_level(logging.INFO, logger="players_api.access")

    client.post("/api/players", data={}, headers={"X-Request-ID": "access-1"})

    records = [r for r in caplog.records if r.name == "players_api.access"]
    assert len(records) == 1
    record = records[0]
    assert record.getMessage() == "request.completed"
    assert record.method == "POST"
    assert record.path == "/api/players"
    assert record.status == 400
    assert record.elapsed_ms >= 0
