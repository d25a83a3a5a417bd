"""
Fixtures compartidas de pytest para el servicio de búsqueda.

- Cliente OpenAI falso (respuestas y errores programables)
- Redis en memoria que imita la API de listas de redis.asyncio
- Servicios armados con dependencias de prueba
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union
from unittest.mock import AsyncMock, MagicMock

import pytest

# Agregar directorio principal al path Python
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from infrastructure.persistencia.recent_search_repository import (  # noqa: E402
    InMemoryRecentSearchRepository,
)
from infrastructure.resilience.circuit_breaker import CircuitBreaker  # noqa: E402
from services.ai_search_client import AISearchClient  # noqa: E402
from services.intelligent_search_service import (  # noqa: E402
    IntelligentSearchService,
)


def make_completion(content: Optional[str]) -> MagicMock:
    """Respuesta de chat.completions.create con un único choice."""
    return MagicMock(choices=[MagicMock(message=MagicMock(content=content))])


def make_openai_client(
    *responses: Union[str, None, Exception],
) -> MagicMock:
    """
    Cliente OpenAI falso. Cada llamada consume la siguiente respuesta;
    si es una excepción, se lanza.
    """
    client = MagicMock()
    side_effect = [
        r if isinstance(r, Exception) else make_completion(r) for r in responses
    ]
    client.chat.completions.create = AsyncMock(side_effect=side_effect)
    return client


class MockRedis:
    """Redis falso con las operaciones de lista usadas por el historial."""

    def __init__(self):
        self._lists: Dict[str, List[str]] = {}
        self.expirations: Dict[str, int] = {}
        self.closed = False

    async def ping(self):
        return True

    async def lrem(self, key: str, count: int, value: str):
        items = self._lists.get(key, [])
        kept = [item for item in items if item != value]
        self._lists[key] = kept
        return len(items) - len(kept)

    async def lpush(self, key: str, *values: str):
        items = self._lists.setdefault(key, [])
        for value in values:
            items.insert(0, value)
        return len(items)

    @staticmethod
    def _slice(items: List[str], start: int, end: int) -> List[str]:
        # Igual que Redis: índices negativos cuentan desde el final, -1 es el último
        if end < 0:
            end = len(items) + end
        return items[start : end + 1]

    async def ltrim(self, key: str, start: int, end: int):
        self._lists[key] = self._slice(self._lists.get(key, []), start, end)
        return True

    async def lrange(self, key: str, start: int, end: int):
        return list(self._slice(self._lists.get(key, []), start, end))

    async def expire(self, key: str, seconds: int):
        self.expirations[key] = seconds
        return True

    async def delete(self, key: str):
        return 1 if self._lists.pop(key, None) is not None else 0

    async def aclose(self):
        self.closed = True


@pytest.fixture
def mock_redis() -> MockRedis:
    return MockRedis()


@pytest.fixture
def memory_repository() -> InMemoryRecentSearchRepository:
    return InMemoryRecentSearchRepository(max_entries=10)


@pytest.fixture
def build_ai_client():
    """Fábrica de AISearchClient con un cliente OpenAI falso."""

    def _build(
        *responses: Union[str, None, Exception],
        configured: bool = True,
        failure_threshold: int = 5,
    ) -> AISearchClient:
        return AISearchClient(
            openai_client=make_openai_client(*responses) if configured else None,
            semaphore=asyncio.Semaphore(2),
            timeout_seconds=1.0,
            circuit_breaker=CircuitBreaker(
                name="test-openai", failure_threshold=failure_threshold
            ),
            logger=logging.getLogger("tests.ai"),
        )

    return _build


@pytest.fixture
def build_service(memory_repository):
    """Fábrica de IntelligentSearchService con historial en memoria."""

    def _build(ai_client: AISearchClient, **kwargs) -> IntelligentSearchService:
        return IntelligentSearchService(
            ai_client=ai_client,
            recent_searches=kwargs.pop("recent_searches", memory_repository),
            **kwargs,
        )

    return _build
