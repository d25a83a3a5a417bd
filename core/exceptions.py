"""Excepciones del dominio de búsqueda."""

from typing import Optional


class BusquedaError(Exception):
    """Error base del servicio de búsqueda."""
    pass


class InvalidQueryError(BusquedaError):
    """La consulta no tiene contenido buscable."""

    def __init__(self, query: Optional[str] = None):
        super().__init__("La consulta no puede estar vacía")
        self.query = query


class AIServiceError(BusquedaError):
    """Fallo al consultar el servicio de IA (red, timeout, respuesta vacía)."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"AI {operation} failed: {reason}")
        self.operation = operation
        self.reason = reason


class CircuitBreakerOpenError(BusquedaError):
    """Excepción lanzada cuando el circuito está abierto."""

    def __init__(self, name: str):
        super().__init__(f"Circuit breaker '{name}' is open")
        self.name = name
