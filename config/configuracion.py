"""
Configuración del servicio de búsqueda inteligente

Centraliza las variables de configuración del servicio. Utiliza
pydantic-settings para validación y manejo de variables de entorno, con
soporte para archivos .env.

Variables de entorno soportadas:
- LOG_LEVEL: Nivel de logging (DEBUG, INFO, WARNING, ERROR). Default: INFO
- LOG_FORMAT: "json" o "text". Default: json
- OPENAI_API_KEY: API key de OpenAI para mejorar búsquedas. Optional
- OPENAI_MODEL: Modelo usado para mejorar consultas. Default: gpt-4o-mini
- OPENAI_TIMEOUT_SECONDS: Tiempo máximo de espera por llamada. Default: 5
- MAX_OPENAI_CONCURRENCY: Llamadas simultáneas a OpenAI. Default: 5
- AI_FAILURE_THRESHOLD: Fallos consecutivos antes de abrir el circuito. Default: 5
- AI_OPEN_SECONDS: Segundos con el circuito abierto. Default: 20
- USE_AI_ENHANCEMENT: Habilita la mejora de consultas con IA. Default: true
- REDIS_URL: URL de Redis para búsquedas recientes. Default: redis://localhost:6379
- RECENT_SEARCHES_LIMIT: Búsquedas recientes guardadas por usuario. Default: 10
- RECENT_SEARCHES_TTL_SECONDS: TTL del historial en Redis. Default: 30 días
- SEARCH_API_HOST / SEARCH_API_PORT / SEARCH_API_PREFIX: servidor HTTP
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfiguracionServicio(BaseSettings):
    """Configuración centralizada del servicio de búsqueda."""

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # OpenAI Configuration
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 5.0
    max_openai_concurrency: int = 5

    # Circuit breaker de IA
    ai_failure_threshold: int = 5
    ai_open_seconds: float = 20.0
    use_ai_enhancement: bool = True

    # Redis Configuration
    redis_url: str = "redis://localhost:6379"
    recent_searches_limit: int = 10
    recent_searches_ttl_seconds: int = 60 * 60 * 24 * 30

    # Servidor HTTP
    search_api_host: str = "0.0.0.0"
    search_api_port: int = 8000
    search_api_prefix: str = "/api/v1"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Instancia global de configuración
configuracion = ConfiguracionServicio()
