"""
Comparison-Criticality Detector
===============================
Scores text for "comparable record" density: prices, units, rankings,
identifiers and dimensions laid out as rows.

Three verdicts, all side-effect free:
- table_criticality:  2-of-3 score (keywords, numbers, columns); picks the
                      table chunking budget
- is_price_table:     price keyword AND unit keyword AND >= 3 currency
                      amounts; gates the price-table specialization
- is_comparison_critical_content: looser chunk-level check used when
                      enriching content for embedding
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from blockchunker.documents.text_analysis import extract_numbers, get_line_format
from blockchunker.utils.logger import setup_logger
from config.chunking_settings import ChunkingSettings, get_chunking_settings

logger = setup_logger(__name__)


# =============================================================================
# VOCABULARIES
# =============================================================================

COMPARISON_KEYWORDS = [
    # Prices and finance
    'precio', 'price', 'cost', 'costo', '$', 'usd', 'mxn', 'eur', 'total', 'lista',
    # Comparable products / units
    'unidad', 'unit', 'producto', 'product', 'modelo', 'model', 'tipo', 'type',
    # Metrics
    'ranking', 'score', 'rating', 'nivel', 'level', 'grado', 'grade',
    # Tabular identifiers
    'id', 'código', 'code', 'ref', 'referencia', 'sku',
    # Dimensions
    'm²', 'm2', 'metros', 'size', 'tamaño', 'superficie',
]

PRICE_INDICATORS = [
    '$', 'precio', 'price', 'costo', 'cost', 'lista',
    'mxn', 'usd', 'eur', 'total', 'subtotal',
]

UNIT_INDICATORS = [
    'unidad', 'unit', 'id', 'código', 'code', 'item', 'producto',
]

CHUNK_KEYWORDS = [
    'precio', 'price', 'cost', 'costo', '$', 'total', 'lista', 'unidad',
    'producto', 'modelo', 'ranking', 'score', 'nivel', 'id', 'código',
    'ref', 'm²', 'm2',
]

CURRENCY_AMOUNT = re.compile(r'\$\s*\d[\d,]*(?:\.\d+)?')


@dataclass
class ComparisonCriticalityResult:
    """Combined criticality verdict for a table"""
    is_critical: bool
    is_price_table: bool
    signals: Dict[str, Any] = field(default_factory=dict)


def count_keywords(text: str, keywords: List[str]) -> int:
    """Number of distinct keywords contained in text (case-insensitive)"""
    lowered = text.lower()
    return sum(1 for keyword in keywords if keyword in lowered)


def count_currency_amounts(text: str) -> int:
    return len(CURRENCY_AMOUNT.findall(text))


class ComparisonDetector:
    """Comparison-criticality heuristics driven by ChunkingSettings"""

    def __init__(self, settings: Optional[ChunkingSettings] = None):
        self.settings = settings or get_chunking_settings()

    def table_signals(self, header_lines: List[str], data_lines: List[str]) -> Dict[str, Any]:
        """Raw signals behind the table-level score"""
        lines = [line for line in header_lines + data_lines if line.strip()]
        text = "\n".join(lines)

        keyword_matches = count_keywords(text, COMPARISON_KEYWORDS)
        numeric_tokens = len(extract_numbers(text.lower()))
        if lines:
            average_columns = sum(get_line_format(line).column_count for line in lines) / len(lines)
        else:
            average_columns = 0.0

        score = (
            int(keyword_matches >= self.settings.critical_keyword_threshold)
            + int(numeric_tokens >= self.settings.critical_numeric_threshold)
            + int(average_columns >= self.settings.critical_column_threshold)
        )

        return {
            "keyword_matches": keyword_matches,
            "numeric_tokens": numeric_tokens,
            "average_columns": average_columns,
            "score": score,
        }

    def table_criticality(self, header_lines: List[str], data_lines: List[str]) -> bool:
        """Critical iff at least 2 of the 3 signals hold"""
        signals = self.table_signals(header_lines, data_lines)
        return signals["score"] >= self.settings.critical_score_threshold

    def is_price_table(self, header_lines: List[str], data_lines: List[str]) -> bool:
        """Price keyword, unit/identifier keyword and several currency amounts"""
        text = "\n".join(header_lines + data_lines).lower()

        has_price = count_keywords(text, PRICE_INDICATORS) > 0
        has_units = count_keywords(text, UNIT_INDICATORS) > 0
        currency_amounts = count_currency_amounts(text)

        result = has_price and has_units and currency_amounts >= self.settings.min_currency_tokens
        logger.debug(
            f"[PRICE] price={has_price} units={has_units} "
            f"amounts={currency_amounts} -> {result}"
        )
        return result

    def evaluate(self, header_lines: List[str], data_lines: List[str]) -> ComparisonCriticalityResult:
        """Both table verdicts with their signals"""
        signals = self.table_signals(header_lines, data_lines)
        is_critical = signals["score"] >= self.settings.critical_score_threshold
        is_price = self.is_price_table(header_lines, data_lines)
        signals["currency_amounts"] = count_currency_amounts("\n".join(header_lines + data_lines))

        return ComparisonCriticalityResult(
            is_critical=is_critical,
            is_price_table=is_price,
            signals=signals,
        )

    def is_comparison_critical_content(self, text: str) -> bool:
        """Chunk-level check: >= 2 keywords and >= 3 numbers"""
        if not text:
            return False
        keyword_matches = count_keywords(text, CHUNK_KEYWORDS)
        numbers = extract_numbers(text)
        return (
            keyword_matches >= self.settings.chunk_keyword_threshold
            and len(numbers) >= self.settings.chunk_numeric_threshold
        )
