import json
import logging

from app.core.config import settings
from app.core.logging import CustomJsonFormatter, request_id_var

def _format(message="hello", **extra):
    formatter = CustomJsonFormatter("%(timestamp) %(level) %(name) %(message)")
    record = logging.LogRecord("app.services.resume_ai", logging.WARNING, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return json.loads(formatter.format(record))

def test_record_carries_service_and_level():
    payload = _format()
    assert payload["message"] == "hello"
    assert payload["level"] == "WARNING"
    assert payload["name"] == "app.services.resume_ai"
    assert payload["service"] == settings.app_name
    assert payload["environment"] == "testing"
    assert payload["timestamp"]
    assert "request_id" not in payload

def test_record_carries_request_id_while_set():
    token = request_id_var.set("req-42")
    try:
        payload = _format(reason="bad json")
    finally:
        request_id_var.reset(token)
    assert payload["request_id"] == "req-42"
    assert payload["reason"] == "bad json"

def test_access_log_names_the_caller(client, alice, auth_headers, caplog):
    caplog.set_level(logging.INFO, logger="app.core.middleware")
    client.get("/api/auth/me", headers=auth_headers(alice))
    client.get("/health")

    access = [r for r in caplog.records if r.name == "app.core.middleware"]
    me_line = next(r for r in access if "/api/auth/me" in r.getMessage())
    health_line = next(r for r in access if "/health" in r.getMessage())
    assert me_line.user_id == alice.id
    assert health_line.user_id is None
