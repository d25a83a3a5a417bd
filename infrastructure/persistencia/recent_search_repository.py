import asyncio
import logging
from typing import Dict, List, Optional

import redis.asyncio as redis

from repositories.interfaces import RecentSearchRepository

logger = logging.getLogger(__name__)


class InMemoryRecentSearchRepository(RecentSearchRepository):
    """Historial en memoria del proceso (desarrollo y fallback sin Redis)"""

    def __init__(self, max_entries: int = 10):
        self.max_entries = max_entries
        self._storage: Dict[str, List[str]] = {}

    async def add(self, user_id: str, query: str) -> None:
        current = [item for item in self._storage.get(user_id, []) if item != query]
        self._storage[user_id] = [query, *current][: self.max_entries]

    async def list(self, user_id: str, limit: int = 10) -> List[str]:
        return list(self._storage.get(user_id, [])[: max(limit, 0)])

    async def clear(self, user_id: str) -> None:
        self._storage.pop(user_id, None)


class RedisRecentSearchRepository(RecentSearchRepository):
    """
    Historial en una lista Redis por usuario.

    Si Redis no está disponible usa memoria local, igual que el resto de
    los clientes Redis del servicio.
    """

    KEY_PREFIX = "recent_searches"

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        redis_url: str = "redis://localhost:6379",
        max_entries: int = 10,
        ttl_seconds: Optional[int] = None,
        max_retries: int = 3,
    ):
        self.redis_client = redis_client
        self.redis_url = redis_url
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._max_retries = max_retries
        self._connected = redis_client is not None
        self._fallback = InMemoryRecentSearchRepository(max_entries=max_entries)

    @property
    def is_connected(self) -> bool:
        return self._connected and self.redis_client is not None

    def _key(self, user_id: str) -> str:
        return f"{self.KEY_PREFIX}:{user_id}"

    async def connect(self) -> None:
        """Conectar a Redis con reintentos; si falla queda en modo fallback"""
        for attempt in range(self._max_retries):
            try:
                self.redis_client = redis.from_url(
                    self.redis_url,
                    decode_responses=True,
                    socket_timeout=5,
                    socket_connect_timeout=5,
                )
                await self.redis_client.ping()
                self._connected = True
                logger.info("✅ Conectado a Redis para búsquedas recientes")
                return
            except Exception as e:
                logger.warning(
                    f"⚠️ Intento {attempt + 1}/{self._max_retries} - Error conectando a Redis: {e}"
                )
                if attempt < self._max_retries - 1:
                    await asyncio.sleep(1 * (attempt + 1))

        logger.warning("⚠️ Modo fallback activado: búsquedas recientes en memoria local")
        self._connected = False

    async def disconnect(self) -> None:
        if self.redis_client:
            try:
                await self.redis_client.aclose()
                logger.info("🔌 Desconectado de Redis")
            except Exception as e:
                logger.warning(f"⚠️ Error desconectando de Redis: {e}")
            finally:
                self.redis_client = None
                self._connected = False

    async def add(self, user_id: str, query: str) -> None:
        if self.is_connected:
            key = self._key(user_id)
            try:
                await self.redis_client.lrem(key, 0, query)
                await self.redis_client.lpush(key, query)
                await self.redis_client.ltrim(key, 0, self.max_entries - 1)
                if self.ttl_seconds:
                    await self.redis_client.expire(key, self.ttl_seconds)
                logger.debug(f"💾 Búsqueda reciente guardada: {key}")
                return
            except Exception as e:
                logger.warning(f"⚠️ Error guardando en Redis, usando fallback local: {e}")
                # Modo fallback hasta el próximo connect()
                self._connected = False

        await self._fallback.add(user_id, query)

    async def list(self, user_id: str, limit: int = 10) -> List[str]:
        if limit <= 0:
            return []

        if self.is_connected:
            try:
                items = await self.redis_client.lrange(self._key(user_id), 0, limit - 1)
                return list(items or [])
            except Exception as e:
                logger.warning(f"⚠️ Error leyendo de Redis, usando fallback local: {e}")
                self._connected = False

        return await self._fallback.list(user_id, limit)

    async def clear(self, user_id: str) -> None:
        if self.is_connected:
            try:
                await self.redis_client.delete(self._key(user_id))
            except Exception as e:
                logger.warning(f"⚠️ Error eliminando de Redis: {e}")

        # Siempre limpiar también la copia local
        await self._fallback.clear(user_id)
