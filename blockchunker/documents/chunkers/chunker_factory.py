"""
Chunker Factory
===============
Selects the chunking strategy for a semantic block.

Usage:
    factory = ChunkerFactory(chunk_size=1000)
    chunker = factory.get_chunker(block)
    chunks = chunker.chunk(block, context)
"""
import logging
from typing import Dict, Optional, Type

from blockchunker.documents.block_classifier import BlockType
from blockchunker.documents.block_segmenter import SemanticBlock
from config.chunking_settings import ChunkingSettings, get_chunking_settings
from .base_chunker import BaseChunker
from .complete_block_chunker import CompleteBlockChunker
from .list_aware_chunker import ListAwareChunker
from .overlapping_chunker import OverlappingChunker
from .table_aware_chunker import TableAwareChunker

logger = logging.getLogger(__name__)


# =============================================================================
# CHUNKER CONFIGURATION
# =============================================================================

CHUNKER_CONFIG: Dict[str, Type[BaseChunker]] = {
    BlockType.TABLE: TableAwareChunker,
    BlockType.STRUCTURED: TableAwareChunker,
    BlockType.LIST: ListAwareChunker,
}

# paragraph, header and unknown blocks
DEFAULT_CHUNKER: Type[BaseChunker] = OverlappingChunker


class ChunkerFactory:
    """
    Factory for block-type specific chunkers.

    Blocks that already fit the chunk size always go to the
    CompleteBlockChunker, whatever their type. Instances are cached per
    factory, never shared between factories.
    """

    def __init__(self, chunk_size: int, settings: Optional[ChunkingSettings] = None):
        self.chunk_size = chunk_size
        self.settings = settings or get_chunking_settings()
        self._instances: Dict[Type[BaseChunker], BaseChunker] = {}

    def get_chunker_class(self, block: SemanticBlock) -> Type[BaseChunker]:
        """Strategy class for a block"""
        if len(block.text) <= self.chunk_size:
            return CompleteBlockChunker
        return CHUNKER_CONFIG.get(block.type, DEFAULT_CHUNKER)

    def get_chunker(self, block: SemanticBlock) -> BaseChunker:
        """
        Get chunker for a block.

        Args:
            block: Classified semantic block

        Returns:
            Appropriate BaseChunker instance
        """
        chunker_class = self.get_chunker_class(block)

        if chunker_class not in self._instances:
            self._instances[chunker_class] = chunker_class(settings=self.settings)
            logger.debug(f"Created {chunker_class.__name__}")

        return self._instances[chunker_class]

    def list_chunkers(self) -> Dict[str, str]:
        """Block type -> chunker class name"""
        strategies = {block_type: cls.__name__ for block_type, cls in CHUNKER_CONFIG.items()}
        strategies["default"] = DEFAULT_CHUNKER.__name__
        strategies["complete"] = CompleteBlockChunker.__name__
        return strategies
