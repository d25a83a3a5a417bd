"""
Tests del logging estructurado.
"""

import json
import logging

from infrastructure.logging.structured_logger import (
    HumanReadableFormatter,
    StructuredFormatter,
    clear_correlation_id,
    clear_request_context,
    get_correlation_id,
    set_correlation_id,
    set_request_context,
)


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "busqueda.test", logging.INFO, __file__, 1, message, None, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestCorrelationId:
    def test_genera_si_no_se_indica(self):
        cid = set_correlation_id()

        assert cid
        assert get_correlation_id() == cid
        clear_correlation_id()
        assert get_correlation_id() is None


class TestStructuredFormatter:
    def test_formato_json(self):
        set_correlation_id("cid-1")
        set_request_context(method="GET", path="/api/v1/normalize", client_ip=None)
        try:
            output = StructuredFormatter(service_name="svc").format(
                _record("🔍 Normalización local", circuit_breaker="openai-search")
            )
        finally:
            clear_correlation_id()
            clear_request_context()

        data = json.loads(output)
        assert data["message"] == "🔍 Normalización local"
        assert data["level"] == "INFO"
        assert data["service"] == "svc"
        assert data["correlation_id"] == "cid-1"
        assert data["context"] == {"method": "GET", "path": "/api/v1/normalize"}
        assert data["extra"] == {"circuit_breaker": "openai-search"}

    def test_sin_contexto(self):
        data = json.loads(StructuredFormatter().format(_record("hola")))

        assert "correlation_id" not in data
        assert "context" not in data
        assert "extra" not in data


def test_formato_legible():
    set_correlation_id("abcdef123456")
    try:
        line = HumanReadableFormatter().format(_record("mensaje"))
    finally:
        clear_correlation_id()

    assert "[abcdef12]" in line
    assert "busqueda.test: mensaje" in line
