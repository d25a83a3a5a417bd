"""Patrones de resiliencia para llamadas externas."""

from .circuit_breaker import CircuitBreaker, CircuitBreakerOpenError, CircuitState

__all__ = ["CircuitBreaker", "CircuitBreakerOpenError", "CircuitState"]
