"""
Content Type Classifier
=======================
Best-effort topical label for a chunk, used as an embedding prefix tag.

Content Types (6 + fallback):
- FINANCIAL: prices, taxes, discounts
- MEDICAL: patients, treatments, doses
- LEGAL: articles, clauses, contracts
- TECHNICAL: systems, parameters, configuration
- INVENTORY: products, stock, availability
- TEMPORAL: dates, schedules, appointments
- GENERAL: nothing scored high enough

Each distinct keyword found adds 1 to its type's weight; the heaviest type
wins only when its weight exceeds 2.

Usage:
    classifier = ContentClassifier()
    result = classifier.classify(chunk_text)
    print(result.content_type.value)
"""
from enum import Enum
from typing import Dict, List
from dataclasses import dataclass

from blockchunker.utils.logger import setup_logger

logger = setup_logger(__name__)


class ContentType(str, Enum):
    """Topical content label"""
    FINANCIAL = "financial"
    MEDICAL = "medical"
    LEGAL = "legal"
    TECHNICAL = "technical"
    INVENTORY = "inventory"
    TEMPORAL = "temporal"
    GENERAL = "general"


@dataclass
class ContentClassificationResult:
    """Result of content classification"""
    content_type: ContentType
    weight: int
    matched_keywords: List[str]


# =============================================================================
# CLASSIFICATION KEYWORDS
# =============================================================================

CONTENT_TYPE_KEYWORDS: Dict[ContentType, List[str]] = {
    ContentType.FINANCIAL: [
        'precio', 'costo', 'valor', 'total', 'subtotal', 'impuesto', 'descuento',
        '$', 'usd', 'mxn', 'eur',
    ],
    ContentType.MEDICAL: [
        'paciente', 'diagnóstico', 'tratamiento', 'síntoma', 'medicamento',
        'dosis', 'mg', 'ml', 'resultados',
    ],
    ContentType.LEGAL: [
        'artículo', 'sección', 'cláusula', 'contrato', 'ley', 'decreto',
        'párrafo', 'inciso', 'fracción',
    ],
    ContentType.TECHNICAL: [
        'sistema', 'proceso', 'método', 'función', 'parámetro', 'configuración',
        'algoritmo', 'datos',
    ],
    ContentType.INVENTORY: [
        'producto', 'stock', 'inventario', 'cantidad', 'unidades', 'disponible',
        'agotado', 'existencias',
    ],
    ContentType.TEMPORAL: [
        'fecha', 'hora', 'día', 'mes', 'año', 'calendario', 'horario', 'agenda', 'cita',
    ],
}

MIN_CONTENT_WEIGHT = 2


class ContentClassifier:
    """Weighted-keyword content classifier"""

    def __init__(self, keywords: Dict[ContentType, List[str]] = None, min_weight: int = MIN_CONTENT_WEIGHT):
        self.keywords = keywords or CONTENT_TYPE_KEYWORDS
        self.min_weight = min_weight

    def classify(self, content: str) -> ContentClassificationResult:
        """
        Classify chunk content.

        Args:
            content: Chunk text

        Returns:
            ContentClassificationResult; GENERAL when no type weighs more than 2
        """
        content_lower = content.lower()

        best_type = ContentType.GENERAL
        best_matches: List[str] = []

        # Strictly heavier wins, so ties keep the earlier type
        for content_type, keywords in self.keywords.items():
            matched = [keyword for keyword in keywords if keyword in content_lower]
            if len(matched) > len(best_matches):
                best_type = content_type
                best_matches = matched

        if len(best_matches) <= self.min_weight:
            return ContentClassificationResult(ContentType.GENERAL, len(best_matches), best_matches)

        logger.debug(f"[CLASSIFY] content → {best_type.value} (weight: {len(best_matches)})")
        return ContentClassificationResult(best_type, len(best_matches), best_matches)
