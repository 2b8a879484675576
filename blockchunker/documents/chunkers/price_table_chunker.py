"""
Price Table Chunker
===================
Specialized chunking for confirmed price tables, built so similarity
search can answer "cheapest", "most expensive" and "between X and Y"
questions.

Emits three families, all flagged is_comparison_critical / is_price_table:
1. Sorted chunk: every priced row, ascending, with a min/max/count footer
2. Range chunks: sorted rows split into low / mid / high tiers
3. Section chunks: original row order in windows of 15 rows

Position offsets inside the block: sorted 0, ranges 1000+i, sections 2000+i.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from blockchunker.documents.block_segmenter import SemanticBlock
from .base_chunker import BaseChunker, Chunk, ChunkContext

logger = logging.getLogger(__name__)

PRICE_PATTERN = re.compile(r'\$\s*([\d,]+(?:\.\d+)?)')

PRICE_TIERS = ['low', 'mid', 'high']

SORTED_CHUNK_INDEX = 0
RANGE_CHUNK_INDEX = 1
SECTION_CHUNK_INDEX = 10


@dataclass(frozen=True)
class PricedRow:
    """A data line with its parsed amount"""
    line: str
    price: float


def parse_price(line: str) -> Optional[float]:
    """First $-amount of a line, or None when absent / unparseable"""
    match = PRICE_PATTERN.search(line)
    if not match:
        return None
    try:
        return float(match.group(1).replace(',', ''))
    except ValueError:
        return None


def format_amount(value: float) -> str:
    """1234567 -> '1,234,567'; 99.5 -> '99.50'"""
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.2f}"


class PriceTableChunker(BaseChunker):
    """
    Chunks price tables into sorted, tiered and sectioned views.

    Rows whose amount cannot be parsed are left out of the sorted and
    range views but always appear in the section chunks.
    """

    def chunk(self, block: SemanticBlock, context: ChunkContext) -> List[Chunk]:
        header_lines, data_lines = self.split_header(block.content_lines)
        data_lines = [line for line in data_lines if line.strip()]
        return self.chunk_rows(block, context, header_lines, data_lines)

    def chunk_rows(
        self,
        block: SemanticBlock,
        context: ChunkContext,
        header_lines: List[str],
        data_lines: List[str],
    ) -> List[Chunk]:
        """Build all three families from already split rows"""
        header_text = "\n".join(header_lines)
        rows = self.parse_rows(data_lines, context)

        chunks = []
        sorted_chunk = self._sorted_chunk(block, context, header_text, rows)
        if sorted_chunk:
            chunks.append(sorted_chunk)
        chunks.extend(self._range_chunks(block, context, header_text, rows))
        chunks.extend(self._section_chunks(block, context, header_text, data_lines))

        logger.info(
            f"[PRICE] Block {context.block_index}: {len(rows)}/{len(data_lines)} rows priced, "
            f"{len(chunks)} chunks"
        )
        return chunks

    def parse_rows(self, data_lines: List[str], context: ChunkContext) -> List[PricedRow]:
        """Parsed rows sorted by ascending price (stable for ties)"""
        rows = []
        for line in data_lines:
            price = parse_price(line)
            if price is None:
                logger.debug(f"[PRICE] No parseable amount in block {context.block_index}: {line[:60]!r}")
                continue
            rows.append(PricedRow(line, price))

        return sorted(rows, key=lambda row: row.price)

    def _flags(self, **extra):
        return {
            'is_comparison_critical': True,
            'is_price_table': True,
            'has_headers': True,
            **extra,
        }

    def _sorted_chunk(
        self,
        block: SemanticBlock,
        context: ChunkContext,
        header_text: str,
        rows: List[PricedRow],
    ) -> Optional[Chunk]:
        if not rows:
            return None

        lowest = rows[0].price
        highest = rows[-1].price

        content = header_text + "\n\n"
        content += "[SORTED BY PRICE: LOWEST TO HIGHEST]\n"
        content += "\n".join(row.line for row in rows)
        content += "\n\n[SUMMARY]\n"
        content += f"Lowest price: ${format_amount(lowest)}\n"
        content += f"Highest price: ${format_amount(highest)}\n"
        content += f"Total options: {len(rows)}"

        return self.make_chunk(
            block, context, SORTED_CHUNK_INDEX, content,
            offset=0,
            suffix="sorted_prices",
            **self._flags(
                price_view="sorted",
                price_count=len(rows),
                min_price=lowest,
                max_price=highest,
            )
        )

    def _range_chunks(
        self,
        block: SemanticBlock,
        context: ChunkContext,
        header_text: str,
        rows: List[PricedRow],
    ) -> List[Chunk]:
        chunks = []
        if not rows:
            return chunks

        # Remainder goes to the earliest tiers
        base_size, remainder = divmod(len(rows), len(PRICE_TIERS))
        start = 0
        for i, tier in enumerate(PRICE_TIERS):
            size = base_size + (1 if i < remainder else 0)
            bucket = rows[start:start + size]
            start += size
            if not bucket:
                continue

            lowest = bucket[0].price
            highest = bucket[-1].price

            content = header_text + "\n\n" if header_text else ""
            content += f"[PRICE RANGE: {tier.upper()}]\n"
            content += "\n".join(row.line for row in bucket)
            content += (
                f"\n\n(This {tier} range covers prices from "
                f"${format_amount(lowest)} to ${format_amount(highest)})"
            )

            chunks.append(self.make_chunk(
                block, context, RANGE_CHUNK_INDEX + i, content,
                offset=self.settings.price_family_stride + i,
                suffix=f"range_{tier}",
                **self._flags(
                    price_view="range",
                    price_range_name=tier,
                    price_count=len(bucket),
                    min_price=lowest,
                    max_price=highest,
                )
            ))

        return chunks

    def _section_chunks(
        self,
        block: SemanticBlock,
        context: ChunkContext,
        header_text: str,
        data_lines: List[str],
    ) -> List[Chunk]:
        size = self.settings.price_section_size
        sections = [data_lines[i:i + size] for i in range(0, len(data_lines), size)]

        chunks = []
        for i, section in enumerate(sections):
            content = header_text + "\n"
            content += "\n".join(section)
            content += f"\n\n[SECTION {i + 1} of {len(sections)}]"

            chunks.append(self.make_chunk(
                block, context, SECTION_CHUNK_INDEX + i, content,
                offset=2 * self.settings.price_family_stride + i,
                suffix="section",
                **self._flags(
                    price_view="section",
                    section_number=i + 1,
                    total_sections=len(sections),
                    data_row_count=len(section),
                )
            ))

        return chunks
