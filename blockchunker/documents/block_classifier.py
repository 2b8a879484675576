"""
Block Classifier
================
Labels a semantic block (table / list / header / structured / paragraph)
and extracts the metadata every chunk of the block inherits.

Rules are evaluated top to bottom, first match wins:

    table       avg columns > 1 and >= 70% of lines within +-1 of the average
    list        > 50% of lines carry a list marker
    header      <= 3 lines, all header-like
    structured  > 50% of lines look like "key: value"
    paragraph   default
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from blockchunker.documents.text_analysis import (
    LineFormat,
    detect_language,
    extract_numbers,
    get_line_format,
    get_mode,
    is_list_item,
    looks_like_header,
    looks_like_key,
)


class BlockType:
    """Block type labels"""
    UNKNOWN = "unknown"
    TABLE = "table"
    LIST = "list"
    HEADER = "header"
    STRUCTURED = "structured"
    PARAGRAPH = "paragraph"


TABLE_CONSISTENCY_RATIO = 0.7
LIST_ITEM_RATIO = 0.5
KEY_LINE_RATIO = 0.5
MAX_HEADER_BLOCK_LINES = 3
MAX_METADATA_HEADERS = 3


@dataclass(frozen=True)
class ClassificationRule:
    """A named block-type predicate over (lines, formats)"""
    name: str
    matches: Callable[[List[str], List[LineFormat]], bool]


def _is_table(lines: List[str], formats: List[LineFormat]) -> bool:
    counts = [f.column_count for f in formats]
    average = sum(counts) / len(counts)
    if average <= 1:
        return False
    consistent = sum(1 for count in counts if abs(count - average) <= 1)
    return consistent / len(counts) >= TABLE_CONSISTENCY_RATIO


def _is_list(lines: List[str], formats: List[LineFormat]) -> bool:
    return sum(1 for line in lines if is_list_item(line)) / len(lines) > LIST_ITEM_RATIO


def _is_header(lines: List[str], formats: List[LineFormat]) -> bool:
    return len(lines) <= MAX_HEADER_BLOCK_LINES and all(looks_like_header(line) for line in lines)


def _is_structured(lines: List[str], formats: List[LineFormat]) -> bool:
    return sum(1 for line in lines if looks_like_key(line)) / len(lines) > KEY_LINE_RATIO


CLASSIFICATION_RULES = [
    ClassificationRule(BlockType.TABLE, _is_table),
    ClassificationRule(BlockType.LIST, _is_list),
    ClassificationRule(BlockType.HEADER, _is_header),
    ClassificationRule(BlockType.STRUCTURED, _is_structured),
]


class BlockClassifier:
    """Classify blocks of lines and extract block metadata"""

    def __init__(self, rules: List[ClassificationRule] = None):
        self.rules = rules if rules is not None else CLASSIFICATION_RULES

    def classify(self, lines: List[str]) -> str:
        """Return the BlockType of the given lines (blank lines ignored)"""
        non_empty = [line.strip() for line in lines if line.strip()]
        if not non_empty:
            return BlockType.UNKNOWN

        formats = [get_line_format(line) for line in non_empty]
        for rule in self.rules:
            if rule.matches(non_empty, formats):
                return rule.name

        return BlockType.PARAGRAPH

    def extract_metadata(self, lines: List[str], block_type: str) -> Dict[str, Any]:
        """
        Metadata shared by all chunks of a block.

        Keys: has_numbers, number_count, number_range (when numbers exist),
        has_headers, headers, language; tables add column_count,
        column_consistency and has_consistent_structure.
        """
        non_empty = [line.strip() for line in lines if line.strip()]
        text = "\n".join(non_empty)

        # Numeric tokens per line; repeats across lines count
        numbers = [number for line in non_empty for number in extract_numbers(line)]
        metadata: Dict[str, Any] = {
            "has_numbers": bool(numbers),
            "number_count": len(numbers),
        }
        if numbers:
            metadata["number_range"] = {"min": min(numbers), "max": max(numbers)}

        headers = [line for line in non_empty if looks_like_header(line)][:MAX_METADATA_HEADERS]
        metadata["has_headers"] = bool(headers)
        metadata["headers"] = headers
        metadata["language"] = detect_language(text)

        if block_type == BlockType.TABLE and non_empty:
            counts = [get_line_format(line).column_count for line in non_empty]
            mode = get_mode(counts)
            consistency = counts.count(mode) / len(counts)
            metadata["column_count"] = mode
            metadata["column_consistency"] = consistency
            metadata["has_consistent_structure"] = consistency >= TABLE_CONSISTENCY_RATIO

        return metadata
