"""
Construcción de las dependencias compartidas del servicio.
"""

import asyncio
import logging

from openai import AsyncOpenAI

from config.configuracion import configuracion
from infrastructure.persistencia.recent_search_repository import (
    RedisRecentSearchRepository,
)
from infrastructure.resilience.circuit_breaker import CircuitBreaker
from services.ai_search_client import AISearchClient
from services.intelligent_search_service import IntelligentSearchService

logger = logging.getLogger(__name__)

# Inicializar OpenAI (opcional)
cliente_openai = (
    AsyncOpenAI(api_key=configuracion.openai_api_key)
    if configuracion.openai_api_key
    else None
)
if not cliente_openai:
    logger.warning("⚠️ API key de OpenAI no configurada, solo normalización local")

semaforo_openai = asyncio.Semaphore(configuracion.max_openai_concurrency)

circuit_breaker_ia = CircuitBreaker(
    name="openai-search",
    failure_threshold=configuracion.ai_failure_threshold,
    open_seconds=configuracion.ai_open_seconds,
)

ai_search_client = AISearchClient(
    openai_client=cliente_openai,
    semaphore=semaforo_openai,
    timeout_seconds=configuracion.openai_timeout_seconds,
    model=configuracion.openai_model,
    circuit_breaker=circuit_breaker_ia,
)

recent_search_repository = RedisRecentSearchRepository(
    redis_url=configuracion.redis_url,
    max_entries=configuracion.recent_searches_limit,
    ttl_seconds=configuracion.recent_searches_ttl_seconds,
)

intelligent_search_service = IntelligentSearchService(
    ai_client=ai_search_client,
    recent_searches=recent_search_repository,
    recent_limit=configuracion.recent_searches_limit,
    use_ai_enhancement=configuracion.use_ai_enhancement,
)


def get_search_service() -> IntelligentSearchService:
    return intelligent_search_service
