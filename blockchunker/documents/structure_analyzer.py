"""
Document Structure Analyzer
===========================
Whole-document pattern detection: separators, list markers, key-value
pairs and tabular layout.

The verdict is diagnostic. Chunking decides per block and never reads it,
but the processor logs it and can prepend it as an annotation.

Usage:
    analyzer = StructureAnalyzer()
    analysis = analyzer.analyze(text)
    print(analysis.structure_type, analysis.confidence)
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from blockchunker.documents.text_analysis import get_line_format, get_mode
from blockchunker.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class StructurePattern:
    """A structural pattern detected across the document"""
    kind: str                      # separator, list, key-value, header
    value: Optional[str]
    confidence: float
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DocumentStructureAnalysis:
    """Whole-document structure verdict"""
    has_structure: bool = False
    structure_type: str = "unstructured"   # unstructured, tabular, list, mixed, key-value
    patterns: List[StructurePattern] = field(default_factory=list)
    confidence: float = 0.0


@dataclass
class TableStructure:
    """Tabular verdict over all lines"""
    is_table: bool
    confidence: float
    mode_columns: int
    consistency: float
    separator_ratio: float
    has_header: bool


# =============================================================================
# DETECTION PATTERNS
# =============================================================================

# (name, regex, minimum fraction of lines with 2+ occurrences)
SEPARATOR_TYPES = [
    ("tab", re.compile(r"\t"), 0.3),
    ("pipe", re.compile(r"\|"), 0.3),
    ("comma", re.compile(r","), 0.5),
    ("multispace", re.compile(r"\s{2,}"), 0.3),
]

LIST_TYPES = [
    ("numbered", re.compile(r"^\s*\d+[.)]\s+")),
    ("lettered", re.compile(r"^\s*[a-z][.)]\s+", re.IGNORECASE)),
    ("bulleted", re.compile(r"^\s*[-*•]\s+")),
    ("markdown", re.compile(r"^\s*#{1,6}\s+")),
]

KEY_VALUE_TYPES = [
    ("colon", re.compile(r"^[^:]+:\s*.+$")),
    ("equals", re.compile(r"^[^=]+=\s*.+$")),
    ("arrow", re.compile(r"^[^→]+→\s*.+$")),
]

LIST_MIN_RATIO = 0.2
KEY_VALUE_MIN_RATIO = 0.3

TABLE_MIN_CONSISTENCY = 0.7
TABLE_MIN_SEPARATOR_RATIO = 0.7
HEADER_BONUS = 0.2

TABULAR_CONFIDENCE = 0.7
LIST_CONFIDENCE = 0.5
KEY_VALUE_CONFIDENCE = 0.5


class StructureAnalyzer:
    """
    Detect document-wide structure.

    Each detector returns at most one pattern; the aggregate verdict is
    'mixed' as soon as two different kinds show up.
    """

    def analyze(self, text: str) -> DocumentStructureAnalysis:
        """Analyze raw document text (blank lines are ignored)"""
        lines = [line.strip() for line in text.split("\n") if line.strip()]
        return self.analyze_lines(lines)

    def analyze_lines(self, lines: List[str]) -> DocumentStructureAnalysis:
        """Analyze non-empty lines"""
        analysis = DocumentStructureAnalysis()
        if not lines:
            return analysis

        separator = self.detect_separator(lines)
        list_pattern = self.detect_list(lines)
        key_value = self.detect_key_value(lines)
        table = self.detect_table(lines)

        for pattern in (separator, list_pattern, key_value):
            if pattern:
                analysis.patterns.append(pattern)

        # Column consistency without a dominant separator still counts as tabular
        if table.is_table and not separator:
            separator = StructurePattern(
                kind="separator",
                value="tabular",
                confidence=table.confidence,
                metadata={
                    "mode_columns": table.mode_columns,
                    "consistency": table.consistency,
                    "separator_ratio": table.separator_ratio,
                    "has_header": table.has_header,
                },
            )
            analysis.patterns.append(separator)

        if not analysis.patterns:
            return analysis

        analysis.has_structure = True
        kinds = {pattern.kind for pattern in analysis.patterns}

        if len(kinds) > 1:
            analysis.structure_type = "mixed"
        elif separator and separator.confidence > TABULAR_CONFIDENCE:
            analysis.structure_type = "tabular"
        elif list_pattern and list_pattern.confidence > LIST_CONFIDENCE:
            analysis.structure_type = "list"
        elif key_value and key_value.confidence > KEY_VALUE_CONFIDENCE:
            analysis.structure_type = "key-value"

        analysis.confidence = max(pattern.confidence for pattern in analysis.patterns)

        logger.debug(
            f"[STRUCTURE] {analysis.structure_type} "
            f"(confidence: {analysis.confidence:.2f}, patterns: {sorted(kinds)})"
        )
        return analysis

    # =========================================================================
    # DETECTORS
    # =========================================================================

    def detect_separator(self, lines: List[str]) -> Optional[StructurePattern]:
        """First separator type present (2+ times) on enough lines"""
        if not lines:
            return None

        for name, regex, min_ratio in SEPARATOR_TYPES:
            matching_lines = 0
            total_separators = 0

            for line in lines:
                occurrences = len(regex.findall(line))
                if occurrences > 1:
                    matching_lines += 1
                    total_separators += occurrences

            ratio = matching_lines / len(lines)
            if matching_lines and ratio >= min_ratio:
                return StructurePattern(
                    kind="separator",
                    value=name,
                    confidence=ratio,
                    metadata={"average_separators_per_line": total_separators / matching_lines},
                )

        return None

    def detect_list(self, lines: List[str]) -> Optional[StructurePattern]:
        """First list marker style used by more than 20% of lines"""
        if not lines:
            return None

        for name, regex in LIST_TYPES:
            ratio = sum(1 for line in lines if regex.match(line)) / len(lines)
            if ratio > LIST_MIN_RATIO:
                return StructurePattern(kind="list", value=name, confidence=ratio)

        return None

    def detect_key_value(self, lines: List[str]) -> Optional[StructurePattern]:
        """Best key-value separator by raw match count"""
        if not lines:
            return None

        best_name = None
        best_matches = 0
        for name, regex in KEY_VALUE_TYPES:
            matches = sum(1 for line in lines if regex.match(line.strip()))
            if matches > best_matches:
                best_matches = matches
                best_name = name

        ratio = best_matches / len(lines)
        if ratio > KEY_VALUE_MIN_RATIO:
            return StructurePattern(kind="key-value", value=best_name, confidence=ratio)

        return None

    def detect_table(self, lines: List[str]) -> TableStructure:
        """Column-count consistency verdict"""
        if len(lines) < 2:
            return TableStructure(False, 0.0, 0, 0.0, 0.0, False)

        formats = [get_line_format(line) for line in lines]
        column_counts = [f.column_count for f in formats]

        mode_columns = get_mode(column_counts)
        consistency = column_counts.count(mode_columns) / len(lines)
        has_header = any(f.is_header for f in formats[:3])
        separator_ratio = sum(1 for f in formats if f.has_separator) / len(lines)

        is_table = (
            consistency > TABLE_MIN_CONSISTENCY
            and mode_columns > 1
            and separator_ratio > TABLE_MIN_SEPARATOR_RATIO
        )
        confidence = min(
            1.0,
            (consistency + separator_ratio + (HEADER_BONUS if has_header else 0.0)) / 2.2,
        )

        return TableStructure(is_table, confidence, mode_columns, consistency, separator_ratio, has_header)


def describe_structure(analysis: DocumentStructureAnalysis) -> str:
    """Render the annotation lines prepended to structured documents"""
    lines = []

    if analysis.structure_type != "unstructured":
        lines.append(f"[STRUCTURE: {analysis.structure_type.upper()}]")

    if analysis.patterns:
        described = ", ".join(
            f"{pattern.kind}:{pattern.value}" if pattern.value else pattern.kind
            for pattern in analysis.patterns
        )
        lines.append(f"[PATTERNS: {described}]")

    return "\n".join(lines)
