"""
Logging estructurado con correlation IDs.

- Logs JSON (producción) o legibles con color (desarrollo)
- Correlation ID y contexto de la request tomados de context vars
- Compatible con `logging.getLogger(__name__)` en todos los módulos
"""

import json
import logging
import os
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

SERVICE_NAME = "busqueda-inteligente"

correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
request_context: ContextVar[Optional[Dict[str, Any]]] = ContextVar(
    "request_context", default=None
)

# Atributos propios de LogRecord; lo demás viene de `extra=`
_RECORD_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


def get_correlation_id() -> Optional[str]:
    return correlation_id.get()


def set_correlation_id(cid: Optional[str] = None) -> str:
    """Establece (o genera) el correlation ID del contexto actual."""
    cid = cid or str(uuid.uuid4())
    correlation_id.set(cid)
    return cid


def clear_correlation_id() -> None:
    correlation_id.set(None)


def set_request_context(**kwargs) -> None:
    """Agrega metadata de la request al contexto de logging."""
    current = dict(request_context.get() or {})
    current.update({k: v for k, v in kwargs.items() if v is not None})
    request_context.set(current)


def clear_request_context() -> None:
    request_context.set(None)


class StructuredFormatter(logging.Formatter):
    """Formatter JSON: timestamp, nivel, logger, mensaje, correlation ID y extras."""

    def __init__(self, service_name: str = SERVICE_NAME):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        cid = get_correlation_id()
        if cid:
            log_data["correlation_id"] = cid

        ctx = request_context.get()
        if ctx:
            log_data["context"] = ctx

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Formatter para desarrollo local."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        color = self.COLORS.get(record.levelname, "")
        level = f"{color}{record.levelname:8}{self.RESET}"

        cid = get_correlation_id()
        cid_str = f"[{cid[:8]}] " if cid else ""

        line = f"{timestamp} {level} {cid_str}{record.name}: {record.getMessage()}"

        ctx = request_context.get()
        if ctx:
            line += " | " + " | ".join(f"{k}={v}" for k, v in ctx.items())

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


def configure_logging(
    level: str = "INFO",
    json_output: Optional[bool] = None,
    service_name: str = SERVICE_NAME,
) -> None:
    """
    Configura el root logger.

    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR)
        json_output: True para JSON, False para texto legible.
                    None = usa la variable LOG_FORMAT
        service_name: Nombre del servicio en los logs JSON
    """
    if json_output is None:
        json_output = os.getenv("LOG_FORMAT", "json").lower() == "json"

    formatter: logging.Formatter = (
        StructuredFormatter(service_name=service_name)
        if json_output
        else HumanReadableFormatter()
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)
    root_logger.addHandler(handler)

    # Librerías ruidosas
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
