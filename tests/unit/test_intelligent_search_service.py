"""
Tests del servicio de búsqueda inteligente.

Verifican la prioridad IA → normalizador local, el historial y las
sugerencias.
"""

import pytest

from core.exceptions import InvalidQueryError
from models.catalogo_busquedas import FALLBACK_RECOMMENDATIONS, FALLBACK_SUGGESTIONS
from models.schemas import ResolutionSource, SuggestionType, Urgency


class TestIntelligentSearch:
    @pytest.mark.asyncio
    async def test_usa_mejora_de_ia(self, build_ai_client, build_service):
        service = build_service(build_ai_client("técnico aire acondicionado"))

        resolution = await service.intelligent_search(
            "mi aire acondicionado no enfría bien"
        )

        assert resolution.query == "técnico aire acondicionado"
        assert resolution.original_query == "mi aire acondicionado no enfría bien"
        assert resolution.source == ResolutionSource.AI
        assert resolution.category == "técnico en refrigeración"

    @pytest.mark.asyncio
    async def test_ia_falla_usa_normalizador(self, build_ai_client, build_service):
        service = build_service(build_ai_client(TimeoutError()))

        resolution = await service.intelligent_search(
            "mi aire acondicionado no enfría bien"
        )

        assert resolution.query == "técnico en refrigeración"
        assert resolution.source == ResolutionSource.LOCAL

    @pytest.mark.asyncio
    async def test_sin_ia_configurada(self, build_ai_client, build_service):
        service = build_service(build_ai_client(configured=False))

        resolution = await service.intelligent_search("limpieza profunda de casa")

        assert resolution.query == "limpieza"
        assert resolution.original_query == "limpieza profunda de casa"
        assert resolution.category == "limpieza"

    @pytest.mark.asyncio
    async def test_ia_desactivada_por_pedido(self, build_ai_client, build_service):
        ai_client = build_ai_client()
        service = build_service(ai_client)

        resolution = await service.intelligent_search("plomero", use_ai=False)

        assert resolution.query == "plomero"
        assert resolution.original_query is None
        ai_client.openai_client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_ia_desactivada_por_configuracion(
        self, build_ai_client, build_service
    ):
        ai_client = build_ai_client()
        service = build_service(ai_client, use_ai_enhancement=False)

        resolution = await service.intelligent_search("xyz123 foobar")

        assert resolution.query == "xyz123 foobar"
        assert resolution.category is None
        assert resolution.source == ResolutionSource.LOCAL
        ai_client.openai_client.chat.completions.create.assert_not_called()


class TestHandleSearch:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   "])
    async def test_consulta_vacia(self, build_ai_client, build_service, query):
        service = build_service(build_ai_client(configured=False))

        with pytest.raises(InvalidQueryError):
            await service.handle_search(query, user_id="u1")

        assert await service.recent("u1") == []

    @pytest.mark.asyncio
    async def test_guarda_en_historial(self, build_ai_client, build_service):
        service = build_service(build_ai_client(configured=False))

        await service.handle_search("plomero urgente", user_id="u1")
        await service.handle_search("gasista", user_id="u1")

        assert await service.recent("u1") == ["gasista", "plomero urgente"]

    @pytest.mark.asyncio
    async def test_sin_usuario_no_guarda(
        self, build_ai_client, build_service, memory_repository
    ):
        service = build_service(build_ai_client(configured=False))

        resolution = await service.handle_search("plomero")

        assert resolution.query == "plomero"
        assert memory_repository._storage == {}


class TestSuggestions:
    @pytest.mark.asyncio
    async def test_iniciales_recientes_y_populares(
        self, build_ai_client, build_service, memory_repository
    ):
        for query in ["q1", "q2", "q3", "q4"]:
            await memory_repository.add("u1", query)
        service = build_service(build_ai_client(configured=False))

        suggestions = await service.initial_suggestions("u1")

        assert [s.text for s in suggestions[:3]] == ["q4", "q3", "q2"]
        assert suggestions[0].id == "recent-q4"
        assert all(s.type == SuggestionType.RECENT for s in suggestions[:3])
        popular = suggestions[3:]
        assert len(popular) == 4
        assert [s.metadata.popularity for s in popular] == [100, 90, 80, 70]
        assert popular[0].id == "popular-0"
        assert popular[0].text == "Plomero para arreglar canilla que gotea"

    @pytest.mark.asyncio
    async def test_consulta_corta_no_llama_a_ia(self, build_ai_client, build_service):
        ai_client = build_ai_client()
        service = build_service(ai_client)

        suggestions = await service.suggestions("pl")

        assert len(suggestions) == 4
        assert all(s.type == SuggestionType.POPULAR for s in suggestions)
        ai_client.openai_client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_sugerencias_de_ia_primero(self, build_ai_client, build_service):
        service = build_service(build_ai_client('["Plomero 24 horas"]'))

        suggestions = await service.suggestions("plom")

        assert suggestions[0].id == "ai-0"
        assert suggestions[0].text == "Plomero 24 horas"
        assert suggestions[0].type == SuggestionType.AI
        assert len(suggestions) == 4

    @pytest.mark.asyncio
    async def test_ia_sin_respuesta_usa_respaldo(self, build_ai_client, build_service):
        service = build_service(build_ai_client(RuntimeError("500")))

        suggestions = await service.suggestions("plomero")

        ai_texts = [s.text for s in suggestions if s.type == SuggestionType.AI]
        assert ai_texts == FALLBACK_SUGGESTIONS
        assert len(suggestions) == len(FALLBACK_SUGGESTIONS) + 3


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_consulta_vacia(self, build_ai_client, build_service):
        service = build_service(build_ai_client(configured=False))

        with pytest.raises(InvalidQueryError):
            await service.analyze(" ")

    @pytest.mark.asyncio
    async def test_analisis_local_si_ia_falla(self, build_ai_client, build_service):
        service = build_service(build_ai_client(ConnectionError("sin red")))

        analysis = await service.analyze("olor a gas urgente")

        assert analysis.source == ResolutionSource.LOCAL
        assert analysis.service == "gasista"
        assert analysis.urgency == Urgency.HIGH

    @pytest.mark.asyncio
    async def test_analisis_de_ia(self, build_ai_client, build_service):
        service = build_service(
            build_ai_client('{"intent": "repair", "service": "gasista"}')
        )

        analysis = await service.analyze("olor a gas")

        assert analysis.source == ResolutionSource.AI
        assert analysis.intent == "repair"


class TestRecommendations:
    @pytest.mark.asyncio
    async def test_recomendaciones_de_ia(
        self, build_ai_client, build_service, memory_repository
    ):
        await memory_repository.add("u1", "gasista")
        ai_client = build_ai_client('["Revisión de calefón"]')
        service = build_service(ai_client)

        response = await service.recommendations("u1", location="Córdoba")

        assert response.recommendations == ["Revisión de calefón"]
        assert response.source == ResolutionSource.AI
        prompt = ai_client.openai_client.chat.completions.create.call_args.kwargs[
            "messages"
        ][1]["content"]
        assert "gasista" in prompt

    @pytest.mark.asyncio
    async def test_respaldo_sin_ia(self, build_ai_client, build_service):
        service = build_service(build_ai_client(configured=False))

        response = await service.recommendations("u1")

        assert response.recommendations == FALLBACK_RECOMMENDATIONS
        assert response.source == ResolutionSource.LOCAL


@pytest.mark.asyncio
async def test_clear_recent(build_ai_client, build_service):
    service = build_service(build_ai_client(configured=False))
    await service.handle_search("plomero", user_id="u1")

    await service.clear_recent("u1")

    assert await service.recent("u1") == []
