"""
Middleware de FastAPI para correlation IDs.

Toma X-Correlation-ID de la request (o genera uno), lo deja disponible
para los logs durante la request y lo devuelve en la respuesta.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.logging.structured_logger import (
    clear_correlation_id,
    clear_request_context,
    set_correlation_id,
    set_request_context,
)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Propaga el correlation ID entre request, logs y response."""

    CORRELATION_ID_HEADER = "X-Correlation-ID"
    REQUEST_ID_HEADER = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        cid = request.headers.get(self.CORRELATION_ID_HEADER) or str(uuid.uuid4())
        set_correlation_id(cid)
        request.state.request_id = cid

        set_request_context(
            method=request.method,
            path=request.url.path,
            client_ip=self._get_client_ip(request),
        )

        start_time = time.monotonic()
        try:
            response = await call_next(request)
            response.headers[self.CORRELATION_ID_HEADER] = cid
            response.headers[self.REQUEST_ID_HEADER] = cid
            duration_ms = (time.monotonic() - start_time) * 1000
            response.headers["X-Response-Time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            clear_correlation_id()
            clear_request_context()

    def _get_client_ip(self, request: Request) -> str:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
