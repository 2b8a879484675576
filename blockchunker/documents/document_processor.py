"""
Document Processing Module
Turns extracted document text into ordered, metadata-rich chunks

Pipeline:
    normalize -> structure analysis -> block segmentation
    -> block classification -> chunk building -> summary / queue messages
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

from blockchunker.documents.block_segmenter import BlockSegmenter
from blockchunker.documents.chunk_builder import ChunkBuilder
from blockchunker.documents.chunkers import Chunk
from blockchunker.documents.models import (
    ChunkSummaryEntry,
    DocumentChunkSummary,
    EmbeddingQueueMessage,
)
from blockchunker.documents.structure_analyzer import (
    DocumentStructureAnalysis,
    StructureAnalyzer,
    describe_structure,
)
from blockchunker.exceptions import NoChunksProducedError
from blockchunker.utils.logger import setup_logger
from config.chunking_settings import ChunkingSettings, get_chunking_settings
from config.settings import (
    ANNOTATE_STRUCTURE,
    CHUNK_OVERLAP,
    CHUNK_SIZE,
    CHUNK_WORKERS,
    MAX_TOKENS_PER_CHUNK,
)

logger = setup_logger(__name__)


def normalize_text(text: str) -> str:
    """
    Normalize extracted text before segmentation.

    Column gaps survive as two spaces (tabs included) and up to two blank
    lines are kept, since both are segmentation signals.
    """
    text = text.replace('\r\n', '\n').replace('\r', '\n')

    # Remove common PDF artifacts
    text = text.replace('\x00', '')

    # Tabs become a column gap
    text = text.replace('\t', '  ')

    # Trailing spaces per line
    text = re.sub(r' +\n', '\n', text)

    # Wide gaps collapse to one column gap
    text = re.sub(r' {3,}', '  ', text)

    # At most two blank lines in a row
    text = re.sub(r'\n{4,}', '\n\n\n', text)

    return text.strip()


@dataclass
class ProcessingResult:
    """Everything produced for one document"""
    document_id: str
    knowledge_base_id: str
    agent_id: str
    chunks: List[Chunk]
    structure: DocumentStructureAnalysis
    summary: DocumentChunkSummary
    block_count: int = 0
    block_types: List[str] = field(default_factory=list)

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    def to_queue_messages(self) -> List[EmbeddingQueueMessage]:
        return build_queue_messages(self.chunks, self.agent_id)


def build_queue_messages(chunks: List[Chunk], agent_id: str = "") -> List[EmbeddingQueueMessage]:
    """One embedding queue message per chunk, in chunk order"""
    return [
        EmbeddingQueueMessage(
            chunk_id=chunk.id,
            document_id=chunk.document_id,
            knowledge_base_id=chunk.knowledge_base_id,
            agent_id=agent_id,
            content=chunk.content,
            position=chunk.position,
            metadata=chunk.metadata,
        )
        for chunk in chunks
    ]


class DocumentProcessor:
    """Chunk extracted document text for the embedding pipeline"""

    def __init__(
        self,
        chunk_size: int = CHUNK_SIZE,
        chunk_overlap: int = CHUNK_OVERLAP,
        settings: Optional[ChunkingSettings] = None,
        max_workers: int = CHUNK_WORKERS,
        annotate_structure: bool = ANNOTATE_STRUCTURE,
        max_tokens_per_chunk: int = MAX_TOKENS_PER_CHUNK,
    ):
        """
        Initialize document processor

        Args:
            chunk_size: Target chunk size in characters
            chunk_overlap: Overlap between sliding windows
            settings: Heuristic thresholds (defaults from environment)
            max_workers: Threads used to chunk blocks
            annotate_structure: Prepend [STRUCTURE]/[PATTERNS] lines to the text
            max_tokens_per_chunk: Token estimate above which a chunk is reported (not split)
        """
        self.settings = settings or get_chunking_settings()
        self.builder = ChunkBuilder(chunk_size, chunk_overlap, self.settings, max_workers)
        self.analyzer = StructureAnalyzer()
        self.segmenter = BlockSegmenter()
        self.annotate_structure = annotate_structure
        self.max_tokens_per_chunk = max_tokens_per_chunk

        logger.info(
            f"DocumentProcessor initialized (chunk_size={chunk_size}, "
            f"overlap={chunk_overlap}, workers={max_workers})"
        )

    @property
    def chunk_size(self) -> int:
        return self.builder.chunk_size

    @property
    def chunk_overlap(self) -> int:
        return self.builder.chunk_overlap

    def process(
        self,
        text: str,
        document_id: str,
        knowledge_base_id: str,
        agent_id: str = "",
    ) -> ProcessingResult:
        """
        Chunk a document.

        Args:
            text: Extracted document text
            document_id: Id namespace for the chunks
            knowledge_base_id: Knowledge base the document belongs to
            agent_id: Agent owning the knowledge base

        Returns:
            ProcessingResult with chunks sorted by position

        Raises:
            NoChunksProducedError: If the document yields no chunks
        """
        normalized = normalize_text(text or "")
        if not normalized:
            raise NoChunksProducedError(document_id, "document text is empty")

        structure = self.analyzer.analyze(normalized)
        logger.info(
            f"Document {document_id}: structure {structure.structure_type} "
            f"(confidence {structure.confidence:.2f})"
        )

        # Two blank lines keep the annotation in a block of its own
        if self.annotate_structure and structure.has_structure:
            normalized = describe_structure(structure) + "\n\n\n" + normalized

        blocks = self.segmenter.segment(normalized.split('\n'))
        logger.info(f"Document {document_id}: {len(blocks)} semantic blocks detected")

        chunks = self.builder.build(blocks, document_id, knowledge_base_id)
        if not chunks:
            raise NoChunksProducedError(document_id)

        oversized = [chunk.id for chunk in chunks if chunk.token_count > self.max_tokens_per_chunk]
        if oversized:
            logger.warning(
                f"Document {document_id}: {len(oversized)} chunks above "
                f"{self.max_tokens_per_chunk} estimated tokens (first: {oversized[0]})"
            )

        summary = self.build_summary(chunks)

        return ProcessingResult(
            document_id=document_id,
            knowledge_base_id=knowledge_base_id,
            agent_id=agent_id,
            chunks=chunks,
            structure=structure,
            summary=summary,
            block_count=len(blocks),
            block_types=[block.type for block in blocks],
        )

    def build_summary(self, chunks: List[Chunk]) -> DocumentChunkSummary:
        """Document-level chunk summary stored with the document"""
        return DocumentChunkSummary(
            chunk_count=len(chunks),
            chunk_size=self.chunk_size,
            chunk_overlap=self.chunk_overlap,
            chunks=[
                ChunkSummaryEntry(id=chunk.id, position=chunk.position, token_count=chunk.token_count)
                for chunk in chunks
            ],
        )
