"""
Line Formatter
==============
Per-line feature extraction shared by every stage of the pipeline:
separator detection, column estimates, header / key / list heuristics,
number extraction and a rough language guess.

All functions are total: empty or degenerate input returns a neutral
value instead of raising.
"""
import math
import re
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class LineFormat:
    """Features of a single line"""
    has_separator: bool
    separator_type: str      # tab, pipe, comma, multispace, none
    column_count: int
    is_header: bool
    is_numeric: bool


# =============================================================================
# PATTERNS
# =============================================================================

HEADER_PATTERNS = [
    re.compile(r'^#{1,6}\s+'),                 # Markdown heading
    re.compile(r'^[A-Z][A-Z\s]{2,}$'),         # ALL CAPS
    re.compile(r'^[A-Z][a-zA-Z\s]+:$'),        # Title:
    re.compile(r'^\d+\.\s+[A-Z]'),             # 1. Title
    re.compile(r'^[A-Z][a-zA-Z\s]+\s*-+$'),    # Title ----
    re.compile(r'^[A-Z][a-zA-Z\s]+\s*=+$'),    # Title ====
    re.compile(r'^\[[^\]]+\]$'),               # [Title]
    re.compile(r'^<[^>]+>$'),                  # <Title>
]

KEY_PATTERNS = [
    re.compile(r'^[\w\s]+:\s*.+$'),            # key: value
    re.compile(r'^[\w\s]+=\s*.+$'),            # key = value
    re.compile(r'^[\w\s]+\s*->\s*.+$'),        # key -> value
    re.compile(r'^[\w\s]+\s*=>\s*.+$'),        # key => value
    re.compile(r'^[\w\s]+\t+.+$'),             # key<TAB>value
]

LIST_ITEM_PATTERNS = [
    re.compile(r'^\s*\d+[.)]\s+'),             # 1. / 1)
    re.compile(r'^\s*[a-z][.)]\s+', re.IGNORECASE),  # a. / a)
    re.compile(r'^\s*[-*•]\s+'),               # - * •
    re.compile(r'^\s*\[[ x]\]\s+', re.IGNORECASE),   # [ ] / [x]
]

# (name, detection regex, splitter) in priority order
SEPARATORS = [
    ('tab', re.compile(r'\t'), lambda line: line.split('\t')),
    ('pipe', re.compile(r'\|'), lambda line: [s for s in line.split('|') if s.strip()]),
    ('comma', re.compile(r','), lambda line: line.split(',')),
    ('multispace', re.compile(r'\s{2,}'), lambda line: re.split(r'\s{2,}', line)),
]

GROUPED_NUMBER = re.compile(r'\$?\s*(\d{1,3}(?:,\d{3})*(?:\.\d+)?)')
SUFFIXED_NUMBER = re.compile(r'\$?\s*(\d+(?:\.\d+)?)([kKmMbB])?\b')
PERCENT_NUMBER = re.compile(r'(\d+(?:[.,]\d+)?)\s*%')
PLAIN_NUMBER = re.compile(r'(?<!\w)(\d+(?:\.\d+)?)(?!\w)')

SUFFIX_MULTIPLIERS = {'k': 1_000, 'm': 1_000_000, 'b': 1_000_000_000}

LANGUAGE_WORDS = {
    'es': {
        'el', 'la', 'de', 'que', 'y', 'en', 'un', 'ser', 'se', 'no', 'por', 'con',
        'para', 'como', 'su', 'al', 'lo', 'más', 'pero', 'sus', 'le', 'ya', 'este',
        'sin', 'sobre', 'hasta', 'también', 'cual', 'cuales', 'los', 'las', 'del',
    },
    'en': {
        'the', 'be', 'to', 'of', 'and', 'in', 'that', 'have', 'it', 'for', 'not',
        'on', 'with', 'he', 'as', 'you', 'do', 'at', 'this', 'but', 'his', 'by',
        'from', 'they', 'we', 'say', 'her', 'she', 'or', 'an', 'will', 'my', 'one',
        'all', 'would', 'there', 'their', 'is', 'are',
    },
    'pt': {
        'do', 'da', 'em', 'um', 'é', 'não', 'uma', 'os', 'no', 'na', 'mais', 'dos',
        'mas', 'foi', 'ao', 'ele', 'das', 'tem', 'seu', 'sua', 'ou', 'há', 'quando',
        'muito', 'nos', 'já', 'está', 'eu', 'só', 'pelo', 'pela', 'até', 'isso',
    },
}
DEFAULT_LANGUAGE = 'es'

TOKENS_PER_WORD = 1.33


# =============================================================================
# LINE HEURISTICS
# =============================================================================

def looks_like_header(line: Optional[str]) -> bool:
    """Check if a line reads like a title or table header"""
    if not line:
        return False

    trimmed = line.strip()
    if not trimmed:
        return False

    if any(pattern.search(trimmed) for pattern in HEADER_PATTERNS):
        return True

    # Short capitalized line without sentence punctuation
    return len(trimmed) < 100 and trimmed[0].isupper() and trimmed[-1] not in '.!?'


def looks_like_key(line: str) -> bool:
    """Check if a line looks like a key-value pair"""
    trimmed = line.strip()
    return any(pattern.match(trimmed) for pattern in KEY_PATTERNS)


def is_list_item(line: str) -> bool:
    """Check if a line starts with a list marker"""
    return any(pattern.match(line) for pattern in LIST_ITEM_PATTERNS)


def extract_numbers(text: str) -> List[float]:
    """
    Extract the distinct numbers found in text.

    Understands thousands separators (1,234.56), $ prefixes, k/M/B
    suffixes (1.5k) and percentages. Order is first-seen.
    """
    found = []

    for match in GROUPED_NUMBER.finditer(text):
        found.append(float(match.group(1).replace(',', '')))

    for match in SUFFIXED_NUMBER.finditer(text):
        value = float(match.group(1))
        suffix = match.group(2)
        if suffix:
            value *= SUFFIX_MULTIPLIERS[suffix.lower()]
        found.append(value)

    for match in PERCENT_NUMBER.finditer(text):
        found.append(float(match.group(1).replace(',', '')))

    for match in PLAIN_NUMBER.finditer(text):
        found.append(float(match.group(1)))

    return list(dict.fromkeys(found))


def get_line_format(line: str) -> LineFormat:
    """Compute the LineFormat of a line"""
    separator_type = 'none'
    column_count = 1

    for name, regex, split in SEPARATORS:
        if regex.search(line):
            parts = split(line)
            if len(parts) > 1:
                separator_type = name
                column_count = len(parts)
                break

    numbers = extract_numbers(line)

    return LineFormat(
        has_separator=separator_type != 'none',
        separator_type=separator_type,
        column_count=column_count,
        is_header=looks_like_header(line),
        is_numeric=bool(numbers) and len(numbers) >= column_count / 2,
    )


def detect_language(text: str) -> str:
    """Guess the dominant language (es / en / pt) from common words"""
    words = re.findall(r'\w+', text.lower())

    best_language = DEFAULT_LANGUAGE
    best_count = 0
    for language, vocabulary in LANGUAGE_WORDS.items():
        count = sum(1 for word in words if word in vocabulary)
        if count > best_count:
            best_count = count
            best_language = language

    return best_language


def estimate_token_count(text: str) -> int:
    """Estimate LLM tokens from word count (~1.33 tokens per word)"""
    return math.ceil(len(text.split()) * TOKENS_PER_WORD)


def get_mode(values: List[int]) -> int:
    """Most frequent value; ties go to the value reaching the count first"""
    if not values:
        return 0

    frequency = {}
    mode = values[0]
    max_frequency = 0
    for value in values:
        frequency[value] = frequency.get(value, 0) + 1
        if frequency[value] > max_frequency:
            max_frequency = frequency[value]
            mode = value

    return mode
