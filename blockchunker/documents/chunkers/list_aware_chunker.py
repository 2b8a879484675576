"""
List-Aware Chunker
==================
Keeps list items intact and repeats the list's introduction in every chunk.

Lines before the first list item form the context prefix. A chunk closes
only once it holds at least one item, so the prefix is never emitted
alone between chunks.
"""
import logging
from typing import List

from blockchunker.documents.block_segmenter import SemanticBlock
from blockchunker.documents.text_analysis import is_list_item
from .base_chunker import BaseChunker, Chunk, ChunkContext

logger = logging.getLogger(__name__)


class ListAwareChunker(BaseChunker):
    """Chunks list blocks with a repeated context prefix"""

    def chunk(self, block: SemanticBlock, context: ChunkContext) -> List[Chunk]:
        lines = block.content_lines

        first_item = next((i for i, line in enumerate(lines) if is_list_item(line)), None)
        if first_item is None:
            context_lines, body = [], lines
        else:
            context_lines, body = lines[:first_item], lines[first_item:]

        context_text = "\n".join(context_lines)
        has_context = bool(context_lines)

        chunks = []
        current = context_text
        items = 0

        def flush():
            chunks.append(self.make_chunk(
                block, context, len(chunks), current,
                has_context=has_context,
                item_count=items,
            ))

        for line in body:
            addition = ("\n" if current else "") + line

            if len(current) + len(addition) > context.chunk_size and items > 0:
                flush()
                current = context_text
                items = 0
                addition = ("\n" if current else "") + line

            current += addition
            if is_list_item(line):
                items += 1

        if items > 0 or current != context_text:
            flush()

        logger.debug(f"ListAwareChunker created {len(chunks)} chunks for block {context.block_index}")
        return chunks
