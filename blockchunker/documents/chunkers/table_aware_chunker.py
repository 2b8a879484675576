"""
Table-Aware Chunker
===================
Preserves table structure during chunking for tables and key-value blocks.

Preserves:
- Table headers with every chunk
- Row integrity (no mid-row splits)
- Enough rows per chunk for comparisons when the table is comparison-critical

Confirmed price tables are handed to PriceTableChunker.
"""
import logging
from typing import List, Optional

from blockchunker.documents.block_segmenter import SemanticBlock
from blockchunker.documents.comparison_detector import ComparisonDetector
from config.chunking_settings import ChunkingSettings
from .base_chunker import BaseChunker, Chunk, ChunkContext
from .price_table_chunker import PriceTableChunker

logger = logging.getLogger(__name__)


class TableAwareChunker(BaseChunker):
    """
    Chunks tables while repeating their header.

    Strategy:
    1. Split header lines (line 0 plus up to 2 header-like lines) from data
    2. Score comparison-criticality of the table
    3. Price table -> sorted / range / section views
    4. Otherwise grow header + rows chunks up to the budget; critical
       tables get a tripled budget and at least 10 rows per chunk
    """

    def __init__(
        self,
        settings: Optional[ChunkingSettings] = None,
        detector: Optional[ComparisonDetector] = None,
        price_chunker: Optional[PriceTableChunker] = None,
    ):
        super().__init__(settings)
        self.detector = detector or ComparisonDetector(self.settings)
        self.price_chunker = price_chunker or PriceTableChunker(self.settings)

    def chunk(self, block: SemanticBlock, context: ChunkContext) -> List[Chunk]:
        """Split a table block while preserving its header"""
        header_lines, data_lines = self.split_header(block.content_lines)
        if not header_lines:
            return []

        # Blank lines are not rows
        data_lines = [line for line in data_lines if line.strip()]

        verdict = self.detector.evaluate(header_lines, data_lines)
        logger.debug(
            f"Table block {context.block_index}: critical={verdict.is_critical} "
            f"price_table={verdict.is_price_table} signals={verdict.signals}"
        )

        if verdict.is_price_table:
            chunks = self.price_chunker.chunk_rows(block, context, header_lines, data_lines)
            if chunks:
                return chunks

        return self._chunk_rows(block, context, header_lines, data_lines, verdict.is_critical)

    def _chunk_rows(
        self,
        block: SemanticBlock,
        context: ChunkContext,
        header_lines: List[str],
        data_lines: List[str],
        is_critical: bool,
    ) -> List[Chunk]:
        header_text = "\n".join(header_lines)
        budget = context.chunk_size
        if is_critical:
            budget *= self.settings.critical_size_multiplier

        chunks = []
        current = header_text
        rows = 0

        def flush():
            chunks.append(self.make_chunk(
                block, context, len(chunks), current,
                has_headers=True,
                header_lines=len(header_lines),
                is_comparison_critical=is_critical,
                data_row_count=rows,
            ))

        for line in data_lines:
            addition = "\n" + line

            if len(current) + len(addition) > budget and rows > 0:
                # Critical tables keep growing until they hold enough rows
                if not (is_critical and rows < self.settings.min_critical_rows):
                    flush()
                    current = header_text
                    rows = 0

            current += addition
            rows += 1

        if rows > 0 or not chunks:
            flush()

        logger.debug(f"TableAwareChunker created {len(chunks)} chunks for block {context.block_index}")
        return chunks
