"""Utilidades de texto para búsquedas."""

from .query_normalizer import QueryNormalizer, normalize

__all__ = ["QueryNormalizer", "normalize"]
