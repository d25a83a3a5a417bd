"""
Análisis local de intención, usado cuando la IA no está disponible.
"""

import re
from typing import Optional, Pattern, Sequence

from models.catalogo_busquedas import LOCATION_KEYWORDS, URGENCY_KEYWORDS
from models.schemas import IntentAnalysis, ResolutionSource, Urgency
from utils.query_normalizer import QueryNormalizer, default_normalizer


def _rx(words: Sequence[str]) -> Pattern[str]:
    return re.compile(r"\b(" + "|".join(map(re.escape, words)) + r")\b", re.I)


RX_URGENCY = _rx(URGENCY_KEYWORDS)
RX_LOCATION = _rx(LOCATION_KEYWORDS)


def detect_urgency(query: Optional[str]) -> Urgency:
    if query and RX_URGENCY.search(query):
        return Urgency.HIGH
    return Urgency.MEDIUM


def detect_location(query: Optional[str]) -> Optional[str]:
    match = RX_LOCATION.search(query or "")
    return match.group(1).lower() if match else None


def analyze_query(
    query: Optional[str], normalizer: QueryNormalizer = default_normalizer
) -> IntentAnalysis:
    """
    Analiza una consulta sin IA:
    - service: categoría resuelta por el normalizador (o None)
    - problem: frase detectada, si no es el nombre mismo de la categoría
    - urgency: high si aparece alguna palabra de urgencia
    - location: primera referencia de ubicación encontrada
    """
    best = normalizer.best_candidate(query)
    service = best.category if best else None
    problem = best.phrase if best and best.phrase != best.category else None

    return IntentAnalysis(
        intent="general",
        service=service,
        problem=problem,
        urgency=detect_urgency(query),
        location=detect_location(query),
        source=ResolutionSource.LOCAL,
    )
