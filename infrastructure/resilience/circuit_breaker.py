"""
Circuit Breaker para las llamadas al servicio de IA.

Si OpenAI falla varias veces seguidas, el circuito se abre y las búsquedas
pasan directo al normalizador local durante `open_seconds`, sin esperar
timeouts. Pasado ese tiempo se deja pasar una llamada de prueba
(HALF_OPEN); si funciona, el circuito vuelve a cerrarse.

Estados:
- CLOSED: Funcionamiento normal, las llamadas pasan
- OPEN: Fallos detectados, las llamadas se rechazan de inmediato
- HALF_OPEN: Probando recuperación con llamadas limitadas
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from core.exceptions import CircuitBreakerOpenError

T = TypeVar("T")


class CircuitState(str, Enum):
    """Estados del Circuit Breaker."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """
    Circuit Breaker asíncrono.

    Uso:
        cb = CircuitBreaker(name="openai-search", failure_threshold=5)

        result = await cb.call(fetch_enhancement, query)
    """

    def __init__(
        self,
        name: str = "default",
        failure_threshold: int = 5,
        open_seconds: float = 20.0,
        half_open_max_requests: int = 1,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        self.name = name
        self.failure_threshold = failure_threshold
        self.open_seconds = open_seconds
        self.half_open_max_requests = half_open_max_requests
        self.logger = logger or logging.getLogger(f"circuit_breaker.{name}")
        self._clock = clock

        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._open_until = 0.0
        self._half_open_in_flight = 0
        self._lock = asyncio.Lock()

        # Métricas
        self._total_calls = 0
        self._total_failures = 0
        self._total_rejects = 0

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def is_closed(self) -> bool:
        return self._state == CircuitState.CLOSED

    @property
    def is_open(self) -> bool:
        return self._state == CircuitState.OPEN

    @property
    def is_half_open(self) -> bool:
        return self._state == CircuitState.HALF_OPEN

    async def allow_request(self) -> bool:
        """True si la llamada puede proceder según el estado actual."""
        async with self._lock:
            self._total_calls += 1

            if self._state == CircuitState.OPEN:
                if self._clock() < self._open_until:
                    self._total_rejects += 1
                    return False
                self._move_to(CircuitState.HALF_OPEN)

            if self._state == CircuitState.HALF_OPEN:
                if self._half_open_in_flight >= self.half_open_max_requests:
                    self._total_rejects += 1
                    return False
                self._half_open_in_flight += 1

            return True

    async def record_success(self) -> None:
        async with self._lock:
            self._consecutive_failures = 0
            if self._state == CircuitState.HALF_OPEN:
                self._move_to(CircuitState.CLOSED)

    async def record_failure(self, reason: str = "unknown") -> None:
        async with self._lock:
            self._total_failures += 1
            self._consecutive_failures += 1

            if (
                self._state == CircuitState.HALF_OPEN
                or self._consecutive_failures >= self.failure_threshold
            ):
                self._move_to(CircuitState.OPEN, reason)

    async def call(self, func: Callable[..., Awaitable[T]], *args, **kwargs) -> T:
        """
        Ejecuta `func` protegida por el circuito.

        Raises:
            CircuitBreakerOpenError: si el circuito rechaza la llamada
        """
        if not await self.allow_request():
            raise CircuitBreakerOpenError(self.name)

        try:
            result = await func(*args, **kwargs)
        except asyncio.CancelledError:
            # Libera el cupo de HALF_OPEN si la llamada de prueba se cancela
            await self.record_failure("cancelled")
            raise
        except Exception as exc:
            await self.record_failure(str(exc))
            raise

        await self.record_success()
        return result

    def _move_to(self, new_state: CircuitState, reason: str = "") -> None:
        old_state = self._state
        self._state = new_state
        self._half_open_in_flight = 0

        if new_state == CircuitState.OPEN:
            self._open_until = self._clock() + self.open_seconds
            self._consecutive_failures = 0
            self.logger.warning(
                f"🚨 Circuit breaker '{self.name}': {old_state.value} -> OPEN",
                extra={"circuit_breaker": self.name, "reason": reason},
            )
        else:
            self.logger.info(
                f"🔄 Circuit breaker '{self.name}': {old_state.value} -> {new_state.value.upper()}",
                extra={"circuit_breaker": self.name},
            )

    def get_metrics(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "state": self._state.value,
            "consecutive_failures": self._consecutive_failures,
            "total_calls": self._total_calls,
            "total_failures": self._total_failures,
            "total_rejects": self._total_rejects,
            "seconds_until_half_open": (
                max(0.0, self._open_until - self._clock())
                if self._state == CircuitState.OPEN
                else None
            ),
        }

    async def reset(self) -> None:
        """Fuerza el circuito a CLOSED."""
        async with self._lock:
            self._consecutive_failures = 0
            self._move_to(CircuitState.CLOSED)
