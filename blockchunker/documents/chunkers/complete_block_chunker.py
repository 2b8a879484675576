"""
Complete Block Chunker
======================
Blocks that fit the size budget become exactly one chunk.
"""
from typing import List

from blockchunker.documents.block_segmenter import SemanticBlock
from .base_chunker import BaseChunker, Chunk, ChunkContext


class CompleteBlockChunker(BaseChunker):
    """Emit the whole block as a single chunk"""

    def chunk(self, block: SemanticBlock, context: ChunkContext) -> List[Chunk]:
        return [self.make_chunk(block, context, 0, block.text, is_complete_block=True)]
