"""
Endpoints API del servicio de búsqueda inteligente
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_search_service
from models.schemas import (
    HealthCheck,
    IntentAnalysis,
    NormalizeResponse,
    RecentSearchesResponse,
    RecommendationRequest,
    RecommendationResponse,
    SearchRequest,
    SearchResolution,
    SuggestionResponse,
)
from services.intelligent_search_service import IntelligentSearchService

router = APIRouter()
logger = logging.getLogger(__name__)

SERVICE_VERSION = "1.0.0"


@router.post("/search", response_model=SearchResolution)
async def search(
    request: SearchRequest,
    service: IntelligentSearchService = Depends(get_search_service),
):
    """
    Resolver una búsqueda en texto libre

    - **query**: Texto de búsqueda (ej: "mi aire acondicionado no enfría bien")
    - **user_id**: Usuario, para guardar la búsqueda en su historial
    - **use_ai_enhancement**: Intentar mejorar la consulta con IA (default: true)
    """
    resolution = await service.handle_search(
        request.query,
        user_id=request.user_id,
        use_ai=request.use_ai_enhancement,
    )
    logger.info(
        f"✅ Búsqueda resuelta ({resolution.source.value}): "
        f"'{request.query}' → '{resolution.query}'"
    )
    return resolution


@router.get("/normalize", response_model=NormalizeResponse)
async def normalize_query(
    q: str = Query("", max_length=500, description="Consulta a normalizar"),
    service: IntelligentSearchService = Depends(get_search_service),
):
    """Normalización local, sin IA"""
    return NormalizeResponse(
        query=q,
        normalized=service.normalizer.normalize(q),
        category=service.normalizer.resolve_category(q),
    )


@router.get("/suggestions", response_model=SuggestionResponse)
async def get_suggestions(
    q: str = Query("", max_length=100, description="Consulta parcial"),
    user_id: Optional[str] = Query(None, max_length=128),
    service: IntelligentSearchService = Depends(get_search_service),
):
    """
    Sugerencias de búsqueda

    Con menos de 3 caracteres devuelve búsquedas recientes y populares.
    """
    suggestions = await service.suggestions(q, user_id=user_id)
    return SuggestionResponse(
        suggestions=suggestions,
        metadata={
            "query": q,
            "suggestions_count": len(suggestions),
            "generated_at": datetime.now().isoformat(),
        },
    )


@router.get("/analyze", response_model=IntentAnalysis)
async def analyze(
    q: str = Query(..., min_length=1, max_length=500, description="Consulta a analizar"),
    service: IntelligentSearchService = Depends(get_search_service),
):
    """Intención de la consulta (IA, o análisis local si la IA no responde)"""
    return await service.analyze(q)


@router.post("/recommendations", response_model=RecommendationResponse)
async def recommendations(
    request: RecommendationRequest,
    service: IntelligentSearchService = Depends(get_search_service),
):
    return await service.recommendations(request.user_id, location=request.location)


@router.get("/recent/{user_id}", response_model=RecentSearchesResponse)
async def get_recent_searches(
    user_id: str,
    limit: int = Query(default=10, ge=1, le=50),
    service: IntelligentSearchService = Depends(get_search_service),
):
    searches = await service.recent(user_id, limit)
    return RecentSearchesResponse(user_id=user_id, searches=searches)


@router.delete("/recent/{user_id}")
async def clear_recent_searches(
    user_id: str,
    service: IntelligentSearchService = Depends(get_search_service),
):
    await service.clear_recent(user_id)
    return {"user_id": user_id, "cleared": True}


@router.get("/health", response_model=HealthCheck)
async def health_check(
    service: IntelligentSearchService = Depends(get_search_service),
):
    """Verificar salud del servicio"""
    ai_client = service.ai_client
    return HealthCheck(
        status="healthy",
        timestamp=datetime.now(),
        version=SERVICE_VERSION,
        ai_configured=ai_client.is_configured,
        ai_circuit_state=ai_client.circuit_breaker.state.value,
        redis_connected=service.recent_searches.is_connected,
    )
