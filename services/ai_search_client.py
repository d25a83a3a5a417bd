"""
Cliente de IA para mejorar búsquedas.

Envuelve las llamadas a OpenAI (mejora de consulta, sugerencias, análisis
de intención y recomendaciones). Ningún método propaga errores: ante
cualquier fallo devuelve "sin resultado" (None o lista vacía) para que el
llamador use el normalizador local.
"""

import asyncio
import json
import logging
import re
from typing import Any, List, Optional

from openai import AsyncOpenAI

from core.exceptions import AIServiceError, CircuitBreakerOpenError
from infrastructure.resilience.circuit_breaker import CircuitBreaker
from models.schemas import IntentAnalysis, ResolutionSource, Urgency
from templates.prompts import (
    ANALYZE_SYSTEM_PROMPT,
    ENHANCE_SYSTEM_PROMPT,
    RECOMMENDATIONS_SYSTEM_PROMPT,
    SUGGEST_SYSTEM_PROMPT,
    analyze_user_prompt,
    enhance_user_prompt,
    recommendations_user_prompt,
    suggest_user_prompt,
)

MIN_SUGGESTION_QUERY_LENGTH = 3

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_LIST_BULLET = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def _strip_code_fence(content: str) -> str:
    return _CODE_FENCE.sub("", content.strip()).strip()


def _clean_line(line: str) -> str:
    return _LIST_BULLET.sub("", line).strip().strip('"').strip("'").strip()


def parse_string_list(content: str, key: Optional[str] = None) -> List[str]:
    """
    Interpreta la respuesta del modelo como lista de textos.

    Acepta un array JSON, un objeto JSON con la lista bajo `key`, o texto
    con un elemento por línea (viñetas y numeración se descartan).
    """
    body = _strip_code_fence(content)
    try:
        data: Any = json.loads(body)
    except json.JSONDecodeError:
        return [line for line in map(_clean_line, body.splitlines()) if line]

    if isinstance(data, dict) and key:
        data = data.get(key, [])
    if not isinstance(data, list):
        return []
    return [str(item).strip() for item in data if str(item).strip()]


def parse_intent(content: str) -> IntentAnalysis:
    """Interpreta el JSON de análisis de intención; si no es válido, intención general."""
    try:
        data = json.loads(_strip_code_fence(content))
    except json.JSONDecodeError:
        data = None

    if not isinstance(data, dict):
        return IntentAnalysis(
            intent="general", service="unknown", source=ResolutionSource.AI
        )

    urgency_raw = str(data.get("urgency") or "").lower()
    urgency = (
        Urgency(urgency_raw)
        if urgency_raw in {u.value for u in Urgency}
        else Urgency.MEDIUM
    )

    def _text(field: str) -> Optional[str]:
        value = data.get(field)
        if value is None:
            return None
        return str(value).strip() or None

    return IntentAnalysis(
        intent=_text("intent") or "general",
        service=_text("service"),
        problem=_text("problem"),
        urgency=urgency,
        location=_text("location"),
        source=ResolutionSource.AI,
    )


class AISearchClient:
    """Cliente OpenAI para las operaciones de búsqueda inteligente"""

    def __init__(
        self,
        openai_client: Optional[AsyncOpenAI],
        semaphore: Optional[asyncio.Semaphore] = None,
        timeout_seconds: float = 5.0,
        model: str = "gpt-4o-mini",
        circuit_breaker: Optional[CircuitBreaker] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.openai_client = openai_client
        self.semaphore = semaphore or asyncio.Semaphore(5)
        self.timeout_seconds = timeout_seconds
        self.model = model
        self.circuit_breaker = circuit_breaker or CircuitBreaker(name="openai-search")
        self.logger = logger or logging.getLogger(__name__)

    @property
    def is_configured(self) -> bool:
        return self.openai_client is not None

    async def _complete(
        self,
        operation: str,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Ejecuta una completion y devuelve el texto de la primera opción.

        Raises:
            AIServiceError: sin cliente, timeout, error de red o respuesta vacía
            CircuitBreakerOpenError: el circuito rechazó la llamada
        """
        if not self.openai_client:
            raise AIServiceError(operation, "cliente OpenAI no configurado")

        async def _request() -> str:
            async with self.semaphore:
                response = await asyncio.wait_for(
                    self.openai_client.chat.completions.create(
                        model=self.model,
                        messages=[
                            {"role": "system", "content": system_prompt},
                            {"role": "user", "content": user_prompt},
                        ],
                        temperature=temperature,
                        max_tokens=max_tokens,
                    ),
                    timeout=self.timeout_seconds,
                )
            if not response.choices:
                raise AIServiceError(operation, "respuesta sin opciones")
            content = (response.choices[0].message.content or "").strip()
            if not content:
                raise AIServiceError(operation, "respuesta vacía")
            return content

        try:
            return await self.circuit_breaker.call(_request)
        except (AIServiceError, CircuitBreakerOpenError):
            raise
        except asyncio.TimeoutError as exc:
            raise AIServiceError(operation, "timeout") from exc
        except Exception as exc:
            raise AIServiceError(operation, str(exc)) from exc

    async def enhance_query(self, query: str) -> Optional[str]:
        """Reescribe la consulta como palabras clave de búsqueda."""
        if not query or not query.strip():
            return None

        try:
            content = await self._complete(
                "enhance",
                ENHANCE_SYSTEM_PROMPT,
                enhance_user_prompt(query),
                temperature=0.1,
                max_tokens=100,
            )
        except (AIServiceError, CircuitBreakerOpenError) as exc:
            self.logger.warning(f"⚠️ Error mejorando consulta con IA: {exc}")
            return None

        enhanced = content.strip().strip('"').strip("'").strip()
        if enhanced:
            self.logger.info(f"🤖 IA mejoró: '{query}' → '{enhanced}'")
        return enhanced or None

    async def generate_suggestions(self, partial_query: str) -> List[str]:
        """Sugerencias de búsqueda para un texto parcial (mínimo 3 caracteres)."""
        if len(partial_query or "") < MIN_SUGGESTION_QUERY_LENGTH:
            return []

        try:
            content = await self._complete(
                "suggest",
                SUGGEST_SYSTEM_PROMPT,
                suggest_user_prompt(partial_query),
                temperature=0.7,
                max_tokens=300,
            )
        except (AIServiceError, CircuitBreakerOpenError) as exc:
            self.logger.warning(f"⚠️ Error generando sugerencias con IA: {exc}")
            return []

        return parse_string_list(content, key="suggestions")

    async def analyze_intent(self, query: str) -> Optional[IntentAnalysis]:
        """Intención, servicio, problema, urgencia y ubicación de la consulta."""
        if not query or not query.strip():
            return None

        try:
            content = await self._complete(
                "analyze",
                ANALYZE_SYSTEM_PROMPT,
                analyze_user_prompt(query),
                temperature=0.7,
                max_tokens=300,
            )
        except (AIServiceError, CircuitBreakerOpenError) as exc:
            self.logger.warning(f"⚠️ Error analizando intención con IA: {exc}")
            return None

        return parse_intent(content)

    async def generate_recommendations(
        self,
        user_id: str,
        search_history: List[str],
        location: Optional[str] = None,
    ) -> List[str]:
        """Recomendaciones personalizadas a partir del historial del usuario."""
        try:
            content = await self._complete(
                "recommendations",
                RECOMMENDATIONS_SYSTEM_PROMPT,
                recommendations_user_prompt(search_history, location),
                temperature=0.7,
                max_tokens=300,
            )
        except (AIServiceError, CircuitBreakerOpenError) as exc:
            self.logger.warning(
                f"⚠️ Error generando recomendaciones para {user_id}: {exc}"
            )
            return []

        return parse_string_list(content, key="recommendations")
