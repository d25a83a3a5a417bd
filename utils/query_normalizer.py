"""
Normalizador de consultas de búsqueda.

Convierte lo que escribe el cliente ("mi aire acondicionado no enfría") en la
categoría canónica de profesional ("técnico en refrigeración") usando una
tabla fija de frases. Gana la frase más larga que aparezca en la consulta.
Si ninguna frase coincide, se arma una búsqueda con las dos primeras palabras
significativas del texto.
"""

import logging
from typing import FrozenSet, Iterable, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

# Frase (minúsculas, literal) -> categoría canónica.
# El orden importa: ante frases de igual longitud gana la primera.
PHRASE_CATEGORY_TABLE: Tuple[Tuple[str, str], ...] = (
    # Refrigeración
    ("instalar aire acondicionado", "técnico en refrigeración"),
    ("aire acondicionado", "técnico en refrigeración"),
    ("no enfría", "técnico en refrigeración"),
    ("no enfria", "técnico en refrigeración"),
    ("refrigeración", "técnico en refrigeración"),
    ("refrigeracion", "técnico en refrigeración"),
    ("heladera", "técnico en refrigeración"),
    ("freezer", "técnico en refrigeración"),
    ("split", "técnico en refrigeración"),
    # Plomería
    ("canilla que gotea", "plomero"),
    ("pérdida de agua", "plomero"),
    ("perdida de agua", "plomero"),
    ("llave de paso", "plomero"),
    ("destapación", "plomero"),
    ("destapacion", "plomero"),
    ("caño roto", "plomero"),
    ("cañería", "plomero"),
    ("caneria", "plomero"),
    ("plomería", "plomero"),
    ("plomeria", "plomero"),
    ("inodoro", "plomero"),
    ("canilla", "plomero"),
    ("plomero", "plomero"),
    ("se tapa", "plomero"),
    ("gotea", "plomero"),
    # Gas
    ("pérdida de gas", "gasista"),
    ("perdida de gas", "gasista"),
    ("olor a gas", "gasista"),
    ("termotanque", "gasista"),
    ("no calienta", "gasista"),
    ("calefón", "gasista"),
    ("calefon", "gasista"),
    ("gasista", "gasista"),
    ("estufa", "gasista"),
    ("gas", "gasista"),
    # Electricidad
    ("instalación eléctrica", "electricista"),
    ("instalacion electrica", "electricista"),
    ("tablero eléctrico", "electricista"),
    ("tablero electrico", "electricista"),
    ("se corta la luz", "electricista"),
    ("cortocircuito", "electricista"),
    ("electricista", "electricista"),
    ("no enciende", "electricista"),
    ("disyuntor", "electricista"),
    ("cableado", "electricista"),
    ("enchufe", "electricista"),
    # Automotor
    ("revisión general del auto", "mecánico"),
    ("revision general del auto", "mecánico"),
    ("taller mecánico", "mecánico"),
    ("taller mecanico", "mecánico"),
    ("cambio de aceite", "mecánico"),
    ("camioneta", "mecánico"),
    ("mecánico", "mecánico"),
    ("mecanico", "mecánico"),
    ("embrague", "mecánico"),
    ("frenos", "mecánico"),
    ("motor", "mecánico"),
    ("auto", "mecánico"),
    # Limpieza
    ("limpieza profunda", "limpieza"),
    ("empleada doméstica", "limpieza"),
    ("empleada domestica", "limpieza"),
    ("limpieza", "limpieza"),
    ("limpiar", "limpieza"),
    # Pintura
    ("humedad en la pared", "pintor"),
    ("pintar la casa", "pintor"),
    ("pintura", "pintor"),
    ("pintar", "pintor"),
    ("pintor", "pintor"),
    # Jardinería
    ("cortar el pasto", "jardinero"),
    ("jardinero", "jardinero"),
    ("jardinería", "jardinero"),
    ("jardineria", "jardinero"),
    ("césped", "jardinero"),
    ("cesped", "jardinero"),
    ("jardín", "jardinero"),
    ("jardin", "jardinero"),
    ("pasto", "jardinero"),
    ("poda", "jardinero"),
    # Cerrajería
    ("me quedé afuera", "cerrajero"),
    ("me quede afuera", "cerrajero"),
    ("cerrajero", "cerrajero"),
    ("cerradura", "cerrajero"),
    ("llave", "cerrajero"),
    # Techos
    ("impermeabilización", "techista"),
    ("impermeabilizacion", "techista"),
    ("membrana", "techista"),
    ("techista", "techista"),
    ("gotera", "techista"),
    ("techo", "techista"),
    # Construcción
    ("contrapiso", "albañil"),
    ("ladrillo", "albañil"),
    ("albañil", "albañil"),
    ("albanil", "albañil"),
    ("revoque", "albañil"),
    # Carpintería
    ("muebles a medida", "carpintero"),
    ("carpintero", "carpintero"),
    ("placard", "carpintero"),
    ("mueble", "carpintero"),
    # Electrodomésticos
    ("electrodoméstico", "técnico en electrodomésticos"),
    ("electrodomestico", "técnico en electrodomésticos"),
    ("lavavajillas", "técnico en electrodomésticos"),
    ("secarropas", "técnico en electrodomésticos"),
    ("lavarropas", "técnico en electrodomésticos"),
    ("microondas", "técnico en electrodomésticos"),
    # Computación
    ("computadora", "técnico en computación"),
    ("impresora", "técnico en computación"),
    ("notebook", "técnico en computación"),
    ("pc lenta", "técnico en computación"),
    ("virus", "técnico en computación"),
    ("wifi", "técnico en computación"),
    # Plagas
    ("fumigación", "fumigador"),
    ("fumigacion", "fumigador"),
    ("cucarachas", "fumigador"),
    ("roedores", "fumigador"),
    ("hormigas", "fumigador"),
    ("fumigar", "fumigador"),
    ("plagas", "fumigador"),
    # Mudanzas
    ("mudanza", "mudanzas"),
    ("fletes", "mudanzas"),
    ("flete", "mudanzas"),
    # Clases
    ("clases particulares", "profesor particular"),
    ("profesor particular", "profesor particular"),
    ("apoyo escolar", "profesor particular"),
    # Cuidado de niños
    ("cuidado de niños", "niñera"),
    ("niñera", "niñera"),
)

# Palabras que no aportan a la búsqueda de respaldo
STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "el",
        "la",
        "los",
        "las",
        "un",
        "una",
        "unos",
        "unas",
        "de",
        "del",
        "en",
        "con",
        "por",
        "para",
        "y",
        "o",
        "pero",
        "como",
        "cuando",
        "donde",
        "que",
        "qué",
        "mi",
        "mis",
        "tu",
        "su",
        "sus",
        "al",
        "a",
        "se",
        "me",
        "este",
        "esta",
        "estos",
        "estas",
        "necesito",
        "necesitamos",
        "busco",
        "buscamos",
        "quiero",
        "queremos",
        "requiero",
        "alguien",
        "urgente",
        "urgencia",
        "ahora",
        "favor",
        "hola",
        "buenas",
        "tengo",
        "hace",
        "muy",
        "algo",
    }
)

# Tokens de esta longitud o menos se descartan en el respaldo
MIN_TOKEN_LENGTH = 3
# Cantidad de tokens que arma la búsqueda de respaldo
FALLBACK_TOKEN_COUNT = 2


class MatchCandidate(NamedTuple):
    """Frase de la tabla encontrada dentro de una consulta."""

    phrase: str
    category: str
    length: int


class QueryNormalizer:
    """Resuelve texto libre a una categoría canónica de servicio"""

    def __init__(
        self,
        table: Optional[Iterable[Tuple[str, str]]] = None,
        stop_words: Optional[Iterable[str]] = None,
    ):
        # Tupla para preservar el orden y evitar mutaciones
        self._table: Tuple[Tuple[str, str], ...] = (
            PHRASE_CATEGORY_TABLE if table is None else tuple(table)
        )
        self._stop_words: FrozenSet[str] = (
            STOP_WORDS if stop_words is None else frozenset(stop_words)
        )

    @property
    def table(self) -> Tuple[Tuple[str, str], ...]:
        return self._table

    @property
    def stop_words(self) -> FrozenSet[str]:
        return self._stop_words

    def categories(self) -> List[str]:
        """Categorías distintas en el orden en que aparecen en la tabla"""
        seen = set()
        ordered = []
        for _, category in self._table:
            if category not in seen:
                seen.add(category)
                ordered.append(category)
        return ordered

    def find_candidates(self, query: Optional[str]) -> List[MatchCandidate]:
        """
        Devuelve todas las frases de la tabla contenidas en la consulta,
        en el orden de la tabla.
        """
        lowered = (query or "").lower()
        if not lowered:
            return []

        return [
            MatchCandidate(phrase, category, len(phrase))
            for phrase, category in self._table
            if phrase in lowered
        ]

    def best_candidate(self, query: Optional[str]) -> Optional[MatchCandidate]:
        """
        Frase más larga contenida en la consulta.

        Ante empate de longitud gana la que aparece primero en la tabla.
        """
        best: Optional[MatchCandidate] = None
        for candidate in self.find_candidates(query):
            # Estrictamente mayor: conserva la primera ante empates
            if best is None or candidate.length > best.length:
                best = candidate
        return best

    def resolve_category(self, query: Optional[str]) -> Optional[str]:
        """Categoría de la mejor coincidencia, o None si ninguna frase coincide"""
        best = self.best_candidate(query)
        if best is None:
            return None

        logger.debug(f"🎯 Frase '{best.phrase}' → categoría '{best.category}'")
        return best.category

    def fallback_keywords(self, query: Optional[str]) -> str:
        """
        Búsqueda de respaldo para consultas sin frases conocidas:
        primeras palabras significativas del texto, o el texto original
        si no queda ninguna.
        """
        original = query or ""
        tokens = [
            token
            for token in original.lower().split()
            if len(token) > MIN_TOKEN_LENGTH and token not in self._stop_words
        ]

        if not tokens:
            return original

        return " ".join(tokens[:FALLBACK_TOKEN_COUNT])

    def normalize(self, query: Optional[str]) -> str:
        """
        Normaliza una consulta en texto libre.

        - Busca frases de la tabla dentro de la consulta (sin distinguir
          mayúsculas) y devuelve la categoría de la más específica
        - Si no hay coincidencias, usa la búsqueda de respaldo

        Nunca lanza excepciones: cualquier texto tiene un resultado.
        """
        category = self.resolve_category(query)
        if category is not None:
            return category

        return self.fallback_keywords(query)


# Instancia por defecto con la tabla del módulo
default_normalizer = QueryNormalizer()


# Funciones de conveniencia
def normalize(query: Optional[str]) -> str:
    return default_normalizer.normalize(query)


def resolve_category(query: Optional[str]) -> Optional[str]:
    return default_normalizer.resolve_category(query)


def find_candidates(query: Optional[str]) -> List[MatchCandidate]:
    return default_normalizer.find_candidates(query)
