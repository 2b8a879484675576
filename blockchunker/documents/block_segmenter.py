"""
Semantic Block Segmenter
========================
Splits a document's lines into ordered, contiguous blocks.

Boundaries are decided by an ordered list of named rules. Each rule either
abstains (None) or returns a verdict; the first verdict wins and the
default is "same block". A positive boundary closes the current block and
the boundary line opens the next one.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from blockchunker.documents.block_classifier import BlockClassifier, BlockType
from blockchunker.documents.text_analysis import get_line_format, looks_like_header
from blockchunker.utils.logger import setup_logger

logger = setup_logger(__name__)


SECTION_MARKER = re.compile(r'^[-=*_]{3,}$|^#{1,6}\s|^\[.*?\]$')
MAX_COLUMN_DRIFT = 2


@dataclass
class SemanticBlock:
    """A contiguous run of lines treated as one unit"""
    lines: List[str]
    type: str = BlockType.UNKNOWN
    metadata: Dict[str, Any] = field(default_factory=dict)
    start_index: int = 0
    end_index: int = 0          # inclusive

    @property
    def content_lines(self) -> List[str]:
        """Lines with leading and trailing blank lines removed"""
        start = 0
        end = len(self.lines)
        while start < end and not self.lines[start].strip():
            start += 1
        while end > start and not self.lines[end - 1].strip():
            end -= 1
        return self.lines[start:end]

    @property
    def text(self) -> str:
        return "\n".join(self.content_lines)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass
class BoundaryContext:
    """What a boundary rule sees for one line"""
    current: str                    # trimmed
    previous: Optional[str]         # trimmed, None on the first line
    block_lines: List[str]          # accumulated lines of the open block
    block_type: Callable[[], str]   # lazy classification of the open block


@dataclass(frozen=True)
class BoundaryRule:
    """Named boundary predicate; returns True/False to decide, None to abstain"""
    name: str
    decide: Callable[[BoundaryContext], Optional[bool]]


def _double_blank(ctx: BoundaryContext) -> Optional[bool]:
    if not ctx.current and ctx.previous == "":
        return True
    return None


def _table_continuity(ctx: BoundaryContext) -> Optional[bool]:
    if not ctx.current or not ctx.previous:
        return None

    current = get_line_format(ctx.current)
    previous = get_line_format(ctx.previous)
    if not (current.has_separator and previous.has_separator):
        return None
    if current.column_count <= 1 or previous.column_count <= 1:
        return None
    if abs(current.column_count - previous.column_count) > MAX_COLUMN_DRIFT:
        return None

    # header -> data and data -> data both stay together
    if not current.is_header:
        return False
    return None


def _section_marker(ctx: BoundaryContext) -> Optional[bool]:
    if not SECTION_MARKER.search(ctx.current):
        return None
    if ctx.block_type() == BlockType.TABLE and not looks_like_header(ctx.current):
        return False
    return True


def _header_transition(ctx: BoundaryContext) -> Optional[bool]:
    if (
        looks_like_header(ctx.current)
        and ctx.previous
        and not looks_like_header(ctx.previous)
        and ctx.block_lines
    ):
        return True
    return None


BOUNDARY_RULES = [
    BoundaryRule("double_blank", _double_blank),
    BoundaryRule("table_continuity", _table_continuity),
    BoundaryRule("section_marker", _section_marker),
    BoundaryRule("header_transition", _header_transition),
]


class BlockSegmenter:
    """
    Line-sequence state machine producing classified SemanticBlocks.

    Usage:
        segmenter = BlockSegmenter()
        blocks = segmenter.segment(text.split("\\n"))
    """

    def __init__(
        self,
        classifier: Optional[BlockClassifier] = None,
        rules: Optional[List[BoundaryRule]] = None,
    ):
        self.classifier = classifier or BlockClassifier()
        self.rules = rules if rules is not None else BOUNDARY_RULES

    def is_boundary(self, ctx: BoundaryContext) -> bool:
        """Evaluate rules in order; first verdict wins"""
        for rule in self.rules:
            verdict = rule.decide(ctx)
            if verdict is not None:
                logger.debug(f"[SEGMENT] {rule.name} -> {verdict}: {ctx.current[:60]!r}")
                return verdict
        return False

    def segment(self, lines: List[str]) -> List[SemanticBlock]:
        """Split lines into blocks with inclusive start/end indices"""
        blocks: List[SemanticBlock] = []
        current: List[str] = []
        start_index = 0

        for i, line in enumerate(lines):
            previous = lines[i - 1].strip() if i > 0 else None
            block_lines = current
            ctx = BoundaryContext(
                current=line.strip(),
                previous=previous,
                block_lines=block_lines,
                block_type=lambda: self.classifier.classify(block_lines),
            )

            if current and self.is_boundary(ctx):
                blocks.append(self._close(current, start_index, i - 1))
                current = []
                start_index = i

            current.append(line)

        if current:
            blocks.append(self._close(current, start_index, len(lines) - 1))

        logger.debug(f"[SEGMENT] {len(lines)} lines -> {len(blocks)} blocks")
        return blocks

    def _close(self, lines: List[str], start_index: int, end_index: int) -> SemanticBlock:
        block = SemanticBlock(lines=lines, start_index=start_index, end_index=end_index)
        block.type = self.classifier.classify(lines)
        block.metadata = self.classifier.extract_metadata(lines, block.type)
        return block
