"""
Block Chunking Strategies
=========================
Block-type specific chunking for retrieval.

Strategies:
- CompleteBlockChunker: Blocks that fit the chunk size, emitted whole
- TableAwareChunker: Tables and key-value blocks, header repeated per chunk
- PriceTableChunker: Sorted / tiered / sectioned views of price tables
- ListAwareChunker: Lists with their introduction repeated per chunk
- OverlappingChunker: Sliding window fallback for prose
"""

from .base_chunker import BaseChunker, Chunk, ChunkContext
from .chunker_factory import ChunkerFactory
from .complete_block_chunker import CompleteBlockChunker
from .table_aware_chunker import TableAwareChunker
from .price_table_chunker import PriceTableChunker
from .list_aware_chunker import ListAwareChunker
from .overlapping_chunker import OverlappingChunker

__all__ = [
    'BaseChunker',
    'Chunk',
    'ChunkContext',
    'ChunkerFactory',
    'CompleteBlockChunker',
    'TableAwareChunker',
    'PriceTableChunker',
    'ListAwareChunker',
    'OverlappingChunker',
]
