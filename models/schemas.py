"""
Modelos de datos para el servicio de búsqueda inteligente
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ResolutionSource(str, Enum):
    """Origen de la consulta final"""

    AI = "ai"
    LOCAL = "local"


class Urgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SuggestionType(str, Enum):
    RECENT = "recent"
    POPULAR = "popular"
    AI = "ai"
    LOCATION = "location"


class SearchRequest(BaseModel):
    """Solicitud de búsqueda en texto libre"""

    query: str = Field(..., min_length=1, max_length=500)
    user_id: Optional[str] = Field(default=None, max_length=128)
    use_ai_enhancement: bool = True


class SearchResolution(BaseModel):
    """Consulta final que se usa para filtrar el directorio"""

    query: str
    original_query: Optional[str] = None
    source: ResolutionSource
    category: Optional[str] = None


class NormalizeResponse(BaseModel):
    """Resultado del normalizador local"""

    query: str
    normalized: str
    category: Optional[str] = None


class SuggestionMetadata(BaseModel):
    location: Optional[str] = None
    category: Optional[str] = None
    popularity: Optional[int] = None


class SearchSuggestion(BaseModel):
    """Sugerencia mostrada mientras el usuario escribe"""

    id: str
    text: str
    type: SuggestionType
    metadata: Optional[SuggestionMetadata] = None


class SuggestionResponse(BaseModel):
    suggestions: List[SearchSuggestion]
    metadata: Dict[str, Any] = {}


class IntentAnalysis(BaseModel):
    """Intención detectada en una consulta"""

    intent: str = "general"
    service: Optional[str] = None
    problem: Optional[str] = None
    urgency: Urgency = Urgency.MEDIUM
    location: Optional[str] = None
    source: ResolutionSource = ResolutionSource.LOCAL


class RecommendationRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=128)
    location: Optional[str] = Field(default=None, max_length=120)


class RecommendationResponse(BaseModel):
    recommendations: List[str]
    source: ResolutionSource


class RecentSearchesResponse(BaseModel):
    user_id: str
    searches: List[str]


class HealthCheck(BaseModel):
    """Respuesta de health check"""

    status: str
    timestamp: datetime
    version: str
    ai_configured: bool
    ai_circuit_state: str
    redis_connected: bool


class ErrorResponse(BaseModel):
    """Respuesta de error estándar"""

    error: str
    message: str
    timestamp: datetime
    request_id: Optional[str] = None
