"""
Overlapping Window Chunker
==========================
Fallback for paragraphs, headers and unclassified blocks: a fixed-size
window slides over the block text with an overlap between neighbours.
"""
import logging
from typing import List

from blockchunker.documents.block_segmenter import SemanticBlock
from .base_chunker import BaseChunker, Chunk, ChunkContext

logger = logging.getLogger(__name__)


class OverlappingChunker(BaseChunker):
    """
    Sliding-window chunker.

    The window end is pulled back to the last space or newline when that
    keeps at least 80% of the window; otherwise the cut falls mid-word.
    The next window starts `overlap` characters before the previous end.
    """

    def chunk(self, block: SemanticBlock, context: ChunkContext) -> List[Chunk]:
        text = block.text
        size = context.chunk_size
        overlap = context.chunk_overlap
        min_end_ratio = self.settings.window_pullback_ratio

        chunks = []
        start = 0
        previous_end = 0

        while start < len(text):
            end = min(start + size, len(text))

            if end < len(text):
                boundary = max(text.rfind(" ", start, end + 1), text.rfind("\n", start, end + 1))
                if boundary >= start + size * min_end_ratio:
                    end = boundary

            content = text[start:end]
            if content.strip():
                chunks.append(self.make_chunk(
                    block, context, len(chunks), content,
                    has_overlap=bool(chunks) and start < previous_end,
                    char_start=start,
                    char_end=end,
                ))
            previous_end = end

            if end >= len(text):
                break

            next_start = max(end - overlap, 0)
            if next_start <= start:
                # Overlap as large as the window: continue without overlap
                next_start = end
            start = next_start

        logger.debug(f"OverlappingChunker created {len(chunks)} chunks for block {context.block_index}")
        return chunks
