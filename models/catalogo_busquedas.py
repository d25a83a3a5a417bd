"""
Búsquedas sugeridas y listas de respaldo del buscador.
"""

from typing import List, Tuple

# (texto, categoría) en orden de popularidad
POPULAR_SEARCHES: Tuple[Tuple[str, str], ...] = (
    ("Plomero para arreglar canilla que gotea", "plomeria"),
    ("Electricista para instalar aire acondicionado", "electricidad"),
    ("Mecánico para revisión general del auto", "automotor"),
    ("Limpieza profunda de casa", "limpieza"),
    ("Jardinero para mantenimiento de césped", "jardineria"),
    ("Pintor para renovar habitación", "pintura"),
)

# Sugerencias cuando la IA no responde
FALLBACK_SUGGESTIONS: List[str] = [
    "Plomero para reparaciones",
    "Electricista para instalaciones",
    "Técnico de electrodomésticos",
    "Servicio de limpieza",
]

# Recomendaciones cuando la IA no responde
FALLBACK_RECOMMENDATIONS: List[str] = [
    "Mantenimiento de aire acondicionado",
    "Servicio de plomería",
    "Reparación de electrodomésticos",
]

# Palabras que indican urgencia en la consulta
URGENCY_KEYWORDS: Tuple[str, ...] = (
    "urgente",
    "urgencia",
    "emergencia",
    "rápido",
    "rapido",
    "ahora",
    "hoy",
    "ya",
)

# Referencias de ubicación reconocidas en la consulta
LOCATION_KEYWORDS: Tuple[str, ...] = (
    "a domicilio",
    "en casa",
    "en oficina",
    "en local",
    "zona norte",
    "zona sur",
    "zona oeste",
    "centro",
    "barrio",
)
