"""
Embedding-Time Enrichment
=========================
Prepends human-readable tags to chunk content right before it is
embedded, so structural hints take part in similarity search.

Tags (in order, each only when it applies):
    [Structure: tabular]
    [COMPARABLE DATA - CRITICAL FOR RANKINGS/EXTREMES]
    [Contains numeric values]
    [Comparable data]
    [Content: financial]
    [INSTRUCTION: ...]

Only the embedded text changes; chunks and their metadata are untouched.
"""
import re
from dataclasses import dataclass
from typing import List, Optional

from blockchunker.documents.comparison_detector import ComparisonDetector
from blockchunker.documents.content_classifier import ContentClassifier, ContentType
from blockchunker.documents.text_analysis import (
    extract_numbers,
    get_line_format,
    looks_like_key,
)
from config.chunking_settings import ChunkingSettings, get_chunking_settings

EMPTY_CONTENT_PLACEHOLDER = "[Empty content]"

CRITICAL_TAG = "[COMPARABLE DATA - CRITICAL FOR RANKINGS/EXTREMES]"
INSTRUCTION_TAG = (
    "[INSTRUCTION: This chunk holds data that can be compared. "
    "Suited for maximum/minimum/best/worst queries]"
)

COMPARISON_PATTERNS = [
    re.compile(r'(?:más|menos|mayor|menor|mejor|peor|more|less|greater|lower|better|worse)', re.IGNORECASE),
    re.compile(r'(?:máximo|mínimo|óptimo|ideal|maximum|minimum|optimal)', re.IGNORECASE),
    re.compile(r'(?:comparar|versus|vs|entre|compare|between)', re.IGNORECASE),
    re.compile(r'(?:superior|inferior|igual|equal)', re.IGNORECASE),
    re.compile(r'(?:aumenta|disminuye|crece|reduce|increase|decrease)', re.IGNORECASE),
]

CHUNK_LIST_PATTERNS = [
    re.compile(r'^\s*\d+[.)]\s+'),
    re.compile(r'^\s*[a-zA-Z][.)]\s+'),
    re.compile(r'^\s*[-*•]\s+'),
]


@dataclass(frozen=True)
class EnrichmentSettings:
    """Read-only knobs for enrichment, passed in explicitly"""
    structured_line_ratio: float = 0.5     # Separator lines needed to call a chunk structured
    key_value_ratio: float = 0.5
    list_line_ratio: float = 0.4
    list_pattern_consistency: float = 0.7
    comparable_number_count: int = 2       # More numbers than this suggests comparable data
    repeated_pattern_count: int = 2        # A line shape seen more often than this
    include_content_type: bool = True
    include_instruction: bool = True


@dataclass
class ChunkStructure:
    """Structure verdict for a single chunk"""
    is_structured: bool = False
    type: str = "text"                    # text, tabular, list, key-value, structured-list
    has_numeric_values: bool = False
    has_comparisons: bool = False
    column_count: int = 0
    pattern_consistency: float = 0.0
    is_comparison_critical: bool = False


def line_pattern(line: str) -> Optional[str]:
    """Shape of a line with numbers and quoted values masked"""
    trimmed = line.strip()
    if not trimmed:
        return None

    pattern = re.sub(r'\d+([.,]\d+)?', 'NUM', trimmed)
    pattern = re.sub(r'\$\s*NUM', '$NUM', pattern)
    pattern = re.sub(r'NUM\s*%', 'NUM%', pattern)
    pattern = re.sub(r'"[^"]+"', 'TEXT', pattern)
    pattern = re.sub(r"'[^']+'", 'TEXT', pattern)

    if pattern in ('NUM', 'TEXT'):
        return None
    return pattern


class EmbeddingEnricher:
    """
    Decide and prepend embedding prefix tags for chunk content.

    Usage:
        enricher = EmbeddingEnricher()
        text_to_embed = enricher.enrich(chunk.content)
    """

    def __init__(
        self,
        settings: Optional[EnrichmentSettings] = None,
        chunking_settings: Optional[ChunkingSettings] = None,
        classifier: Optional[ContentClassifier] = None,
    ):
        self.settings = settings or EnrichmentSettings()
        self.detector = ComparisonDetector(chunking_settings or get_chunking_settings())
        self.classifier = classifier or ContentClassifier()

    def enrich(self, content: str) -> str:
        """Return the text to embed for a chunk"""
        if not content or not content.strip():
            return EMPTY_CONTENT_PLACEHOLDER

        tags = self.build_tags(content)
        if not tags:
            return content
        return " ".join(tags) + "\n\n" + content

    def build_tags(self, content: str) -> List[str]:
        structure = self.analyze(content)
        tags = []

        if structure.is_structured:
            tags.append(f"[Structure: {structure.type}]")

        if structure.is_comparison_critical:
            tags.append(CRITICAL_TAG)

        if structure.has_numeric_values:
            tags.append("[Contains numeric values]")
            if structure.has_comparisons or self.has_comparative_potential(content):
                tags.append("[Comparable data]")

        if self.settings.include_content_type:
            content_type = self.classifier.classify(content).content_type
            if content_type != ContentType.GENERAL:
                tags.append(f"[Content: {content_type.value}]")

        if structure.is_comparison_critical and self.settings.include_instruction:
            tags.append(INSTRUCTION_TAG)

        return tags

    def analyze(self, content: str) -> ChunkStructure:
        """Structure verdict of a chunk"""
        structure = ChunkStructure()
        lines = [line for line in content.split("\n") if line.strip()]
        if not lines:
            return structure

        structure.has_numeric_values = bool(extract_numbers(content))
        structure.is_comparison_critical = self.detector.is_comparison_critical_content(content)
        structure.has_comparisons = any(pattern.search(content) for pattern in COMPARISON_PATTERNS)

        formats = [get_line_format(line) for line in lines]
        separator_formats = [f for f in formats if f.has_separator]

        if len(separator_formats) > len(lines) * self.settings.structured_line_ratio:
            average_columns = sum(f.column_count for f in separator_formats) / len(separator_formats)
            structure.is_structured = True
            structure.column_count = round(average_columns)
            structure.pattern_consistency = len(separator_formats) / len(lines)

            if structure.column_count > 1:
                structure.type = "tabular"
            elif self._is_key_value(lines):
                structure.type = "key-value"
            else:
                structure.type = "structured-list"
        elif self._is_list(lines):
            structure.is_structured = True
            structure.type = "list"
            structure.pattern_consistency = self.settings.list_pattern_consistency

        return structure

    def has_comparative_potential(self, content: str) -> bool:
        """Several numbers, or the same line shape repeated"""
        if len(extract_numbers(content)) > self.settings.comparable_number_count:
            return True

        counts = {}
        for line in content.split("\n"):
            pattern = line_pattern(line)
            if pattern:
                counts[pattern] = counts.get(pattern, 0) + 1

        return any(count > self.settings.repeated_pattern_count for count in counts.values())

    def _is_key_value(self, lines: List[str]) -> bool:
        return sum(1 for line in lines if looks_like_key(line)) > len(lines) * self.settings.key_value_ratio

    def _is_list(self, lines: List[str]) -> bool:
        matches = sum(1 for line in lines if any(p.match(line) for p in CHUNK_LIST_PATTERNS))
        return matches > len(lines) * self.settings.list_line_ratio
