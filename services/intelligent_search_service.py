"""
Servicio de búsqueda inteligente.

Compone la mejora con IA y el normalizador local: primero intenta que la IA
reescriba la consulta y, si no hay mejora, resuelve la categoría localmente.
También gestiona las sugerencias y el historial de búsquedas del usuario.
"""

import logging
from typing import List, Optional

from core.exceptions import InvalidQueryError
from models.catalogo_busquedas import (
    FALLBACK_RECOMMENDATIONS,
    FALLBACK_SUGGESTIONS,
    POPULAR_SEARCHES,
)
from models.schemas import (
    IntentAnalysis,
    RecommendationResponse,
    ResolutionSource,
    SearchResolution,
    SearchSuggestion,
    SuggestionMetadata,
    SuggestionType,
)
from repositories.interfaces import RecentSearchRepository
from services.ai_search_client import AISearchClient
from utils.query_analysis import analyze_query
from utils.query_normalizer import QueryNormalizer, default_normalizer

logger = logging.getLogger(__name__)

RECENT_SUGGESTIONS_LIMIT = 3
POPULAR_SUGGESTIONS_LIMIT = 4
# Por debajo de este largo se muestran solo las sugerencias iniciales
MIN_AI_SUGGESTION_LENGTH = 3


class IntelligentSearchService:
    """Orquesta IA + normalizador local + historial de búsquedas"""

    def __init__(
        self,
        ai_client: AISearchClient,
        recent_searches: RecentSearchRepository,
        normalizer: Optional[QueryNormalizer] = None,
        recent_limit: int = 10,
        use_ai_enhancement: bool = True,
    ):
        self.ai_client = ai_client
        self.recent_searches = recent_searches
        self.normalizer = normalizer or default_normalizer
        self.recent_limit = recent_limit
        self.use_ai_enhancement = use_ai_enhancement

    async def intelligent_search(
        self, query: str, use_ai: bool = True
    ) -> SearchResolution:
        """
        Consulta final para el directorio.

        La IA tiene prioridad; si no está disponible, falla o no devuelve
        nada, se usa el normalizador local.
        """
        category = self.normalizer.resolve_category(query)

        if use_ai and self.use_ai_enhancement:
            enhanced = await self.ai_client.enhance_query(query)
            if enhanced:
                return SearchResolution(
                    query=enhanced,
                    original_query=query if enhanced != query else None,
                    source=ResolutionSource.AI,
                    category=category,
                )

        normalized = self.normalizer.normalize(query)
        logger.info(f"🔍 Normalización local: '{query}' → '{normalized}'")
        return SearchResolution(
            query=normalized,
            original_query=query if normalized != query else None,
            source=ResolutionSource.LOCAL,
            category=category,
        )

    async def handle_search(
        self,
        query: str,
        user_id: Optional[str] = None,
        use_ai: bool = True,
    ) -> SearchResolution:
        """
        Punto de entrada de una búsqueda del usuario.

        Raises:
            InvalidQueryError: si la consulta está vacía
        """
        if not query or not query.strip():
            raise InvalidQueryError(query)

        if user_id:
            await self.recent_searches.add(user_id, query)

        return await self.intelligent_search(query, use_ai=use_ai)

    async def initial_suggestions(
        self, user_id: Optional[str] = None
    ) -> List[SearchSuggestion]:
        """Búsquedas recientes del usuario seguidas de las populares"""
        recent = (
            await self.recent_searches.list(user_id, RECENT_SUGGESTIONS_LIMIT)
            if user_id
            else []
        )

        suggestions = [
            SearchSuggestion(id=f"recent-{text}", text=text, type=SuggestionType.RECENT)
            for text in recent
        ]
        suggestions.extend(
            SearchSuggestion(
                id=f"popular-{index}",
                text=text,
                type=SuggestionType.POPULAR,
                metadata=SuggestionMetadata(
                    category=category, popularity=100 - index * 10
                ),
            )
            for index, (text, category) in enumerate(
                POPULAR_SEARCHES[:POPULAR_SUGGESTIONS_LIMIT]
            )
        )
        return suggestions

    async def suggestions(
        self, partial_query: str, user_id: Optional[str] = None
    ) -> List[SearchSuggestion]:
        """
        Sugerencias mientras el usuario escribe: primero las de IA y luego
        hasta tres de las iniciales.
        """
        initial = await self.initial_suggestions(user_id)
        partial = (partial_query or "").strip()
        if len(partial) < MIN_AI_SUGGESTION_LENGTH:
            return initial

        ai_texts = await self.ai_client.generate_suggestions(partial)
        if not ai_texts:
            ai_texts = list(FALLBACK_SUGGESTIONS)

        ai_suggestions = [
            SearchSuggestion(id=f"ai-{index}", text=text, type=SuggestionType.AI)
            for index, text in enumerate(ai_texts)
        ]
        return ai_suggestions + initial[:RECENT_SUGGESTIONS_LIMIT]

    async def analyze(self, query: str) -> IntentAnalysis:
        """Análisis de intención con IA, o local si la IA no responde"""
        if not query or not query.strip():
            raise InvalidQueryError(query)

        analysis = await self.ai_client.analyze_intent(query)
        if analysis is not None:
            return analysis

        return analyze_query(query, normalizer=self.normalizer)

    async def recommendations(
        self, user_id: str, location: Optional[str] = None
    ) -> RecommendationResponse:
        history = await self.recent_searches.list(user_id, self.recent_limit)
        recommendations = await self.ai_client.generate_recommendations(
            user_id, history, location
        )
        if recommendations:
            return RecommendationResponse(
                recommendations=recommendations, source=ResolutionSource.AI
            )

        return RecommendationResponse(
            recommendations=list(FALLBACK_RECOMMENDATIONS),
            source=ResolutionSource.LOCAL,
        )

    async def recent(self, user_id: str, limit: Optional[int] = None) -> List[str]:
        return await self.recent_searches.list(user_id, limit or self.recent_limit)

    async def clear_recent(self, user_id: str) -> None:
        await self.recent_searches.clear(user_id)
        logger.info(f"🧹 Historial de búsquedas eliminado para {user_id}")
