"""
Interfaces de repositorio del servicio de búsqueda.
"""
from abc import ABC, abstractmethod
from typing import List


class RecentSearchRepository(ABC):
    """
    Búsquedas recientes por usuario.

    Contrato:
    - La más reciente primero
    - Sin duplicados: repetir una búsqueda la mueve al principio
    - Como máximo `max_entries` elementos por usuario
    """

    max_entries: int = 10

    @abstractmethod
    async def add(self, user_id: str, query: str) -> None:
        """Registra una búsqueda del usuario."""
        pass

    @abstractmethod
    async def list(self, user_id: str, limit: int = 10) -> List[str]:
        """Devuelve hasta `limit` búsquedas, la más reciente primero."""
        pass

    @abstractmethod
    async def clear(self, user_id: str) -> None:
        """Elimina el historial del usuario."""
        pass

    @property
    def is_connected(self) -> bool:
        """True si usa almacenamiento compartido (no solo memoria local)."""
        return False
