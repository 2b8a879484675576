"""
Chunk Builder
=============
Dispatches every semantic block to its chunking strategy and collects
the resulting chunks in position order.

Blocks are independent, so they can be chunked in a thread pool; the
result is sorted by block, then position, either way. A block whose
chunk offsets outgrow the position stride widens the stride for the whole
document so positions stay unique and in block order.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import List, Optional

from blockchunker.documents.block_segmenter import SemanticBlock
from blockchunker.documents.chunkers import Chunk, ChunkContext, ChunkerFactory
from blockchunker.exceptions import ConfigurationError
from blockchunker.utils.logger import setup_logger
from config.chunking_settings import ChunkingSettings, get_chunking_settings
from config.settings import CHUNK_OVERLAP, CHUNK_SIZE, CHUNK_WORKERS

logger = setup_logger(__name__)


class ChunkBuilder:
    """
    Turn classified blocks into Chunks.

    Args:
        chunk_size: Target chunk size in characters
        chunk_overlap: Overlap for the sliding-window strategy
        settings: Heuristic thresholds
        max_workers: Threads used to chunk blocks (1 = sequential)
    """

    def __init__(
        self,
        chunk_size: int = CHUNK_SIZE,
        chunk_overlap: int = CHUNK_OVERLAP,
        settings: Optional[ChunkingSettings] = None,
        max_workers: int = CHUNK_WORKERS,
    ):
        if chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ConfigurationError(f"chunk_overlap must not be negative, got {chunk_overlap}")
        if max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1, got {max_workers}")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.settings = settings or get_chunking_settings()
        self.max_workers = max_workers
        self.factory = ChunkerFactory(chunk_size, self.settings)

    def build(
        self,
        blocks: List[SemanticBlock],
        document_id: str,
        knowledge_base_id: str,
    ) -> List[Chunk]:
        """Chunk all blocks; returns chunks sorted by position"""
        jobs = [
            (block, ChunkContext(
                document_id=document_id,
                knowledge_base_id=knowledge_base_id,
                block_index=block_index,
                chunk_size=self.chunk_size,
                chunk_overlap=self.chunk_overlap,
            ))
            for block_index, block in enumerate(blocks)
        ]

        if self.max_workers > 1 and len(jobs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(executor.map(lambda job: self.build_block(*job), jobs))
        else:
            results = [self.build_block(block, context) for block, context in jobs]

        chunks = [chunk for block_chunks in results for chunk in block_chunks]
        chunks = self._widen_positions(chunks, document_id)
        chunks.sort(key=lambda chunk: (chunk.block_index, chunk.position))

        logger.info(f"[CHUNK] {len(blocks)} blocks -> {len(chunks)} chunks ({document_id})")
        return chunks

    def build_block(self, block: SemanticBlock, context: ChunkContext) -> List[Chunk]:
        """Chunk a single block; whitespace-only blocks yield nothing"""
        if block.is_empty:
            logger.warning(
                f"[CHUNK] Skipping empty block {context.block_index} "
                f"(lines {block.start_index}-{block.end_index}) in {context.document_id}"
            )
            return []

        chunker = self.factory.get_chunker(block)
        chunks = chunker.chunk(block, context)

        logger.debug(
            f"[CHUNK] Block {context.block_index} ({block.type}, {len(block.text)} chars) "
            f"-> {type(chunker).__name__}: {len(chunks)} chunks"
        )
        return chunks

    def _widen_positions(self, chunks: List[Chunk], document_id: str) -> List[Chunk]:
        """Re-base positions on a larger stride when an offset reaches the configured one"""
        stride = self.settings.block_position_stride
        offsets = [chunk.position - chunk.block_index * stride for chunk in chunks]
        if not offsets or max(offsets) < stride:
            return chunks

        wide = stride
        while max(offsets) >= wide:
            wide *= 10

        logger.warning(
            f"[CHUNK] Block offset {max(offsets)} exceeds position stride {stride} "
            f"in {document_id}; using stride {wide}"
        )
        return [
            replace(chunk, position=chunk.block_index * wide + offset)
            for chunk, offset in zip(chunks, offsets)
        ]
