"""
Base Chunker Interface
======================
Abstract base class for all block chunking strategies, plus the Chunk
record they emit.
"""
import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from blockchunker.documents.block_segmenter import SemanticBlock
from blockchunker.documents.text_analysis import estimate_token_count, looks_like_header
from config.chunking_settings import ChunkingSettings, get_chunking_settings

logger = logging.getLogger(__name__)

MAX_HEADER_LINES = 3


@dataclass(frozen=True)
class Chunk:
    """A retrieval-ready slice of a document"""
    id: str
    document_id: str
    knowledge_base_id: str
    content: str
    position: int
    token_count: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return {
            'id': self.id,
            'document_id': self.document_id,
            'knowledge_base_id': self.knowledge_base_id,
            'content': self.content,
            'position': self.position,
            'token_count': self.token_count,
            'metadata': self.metadata,
        }

    @property
    def block_index(self) -> int:
        return self.metadata.get('block_index', 0)

    @property
    def char_count(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class ChunkContext:
    """Per-block inputs shared by every strategy"""
    document_id: str
    knowledge_base_id: str
    block_index: int
    chunk_size: int
    chunk_overlap: int


class BaseChunker(ABC):
    """
    Abstract base class for block chunkers.

    Each chunker turns one SemanticBlock into an ordered list of Chunks.
    Ids and positions come from make_chunk() so every strategy shares the
    same ordering scheme:

        id       = {document_id}_chunk_{block_index}_{chunk_index}[_{suffix}]
        position = block_index * block_position_stride + offset
    """

    def __init__(self, settings: Optional[ChunkingSettings] = None):
        self.settings = settings or get_chunking_settings()

    @abstractmethod
    def chunk(self, block: SemanticBlock, context: ChunkContext) -> List[Chunk]:
        """
        Split a block into chunks.

        Args:
            block: Classified semantic block
            context: Document ids, block index and size budget

        Returns:
            List of Chunk objects in intra-block order
        """
        pass

    def estimate_tokens(self, text: str) -> int:
        """Estimate token count (~1.33 tokens per word)"""
        return estimate_token_count(text)

    def make_chunk(
        self,
        block: SemanticBlock,
        context: ChunkContext,
        chunk_index: int,
        content: str,
        offset: Optional[int] = None,
        suffix: Optional[str] = None,
        **flags
    ) -> Chunk:
        """
        Build a Chunk with id, position, token count and merged metadata.

        Args:
            chunk_index: Index of the chunk within its block
            content: Chunk text
            offset: Position offset within the block (defaults to chunk_index)
            suffix: Strategy suffix appended to the id
            **flags: Strategy-specific metadata
        """
        chunk_id = f"{context.document_id}_chunk_{context.block_index}_{chunk_index}"
        if suffix:
            chunk_id = f"{chunk_id}_{suffix}"

        if offset is None:
            offset = chunk_index

        metadata = {
            **copy.deepcopy(block.metadata),
            'block_type': block.type,
            'block_index': context.block_index,
            'chunk_index': chunk_index,
            **flags,
        }

        return Chunk(
            id=chunk_id,
            document_id=context.document_id,
            knowledge_base_id=context.knowledge_base_id,
            content=content,
            position=context.block_index * self.settings.block_position_stride + offset,
            token_count=self.estimate_tokens(content),
            metadata=metadata,
        )

    @staticmethod
    def split_header(lines: List[str]) -> Tuple[List[str], List[str]]:
        """
        Split table lines into (header_lines, data_lines).

        Line 0 is always a header; following header-like lines join it,
        up to 3 header lines in total.
        """
        if not lines:
            return [], []

        header_end = 1
        while header_end < min(MAX_HEADER_LINES, len(lines)) and looks_like_header(lines[header_end]):
            header_end += 1

        return lines[:header_end], lines[header_end:]
