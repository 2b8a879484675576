"""
Data models handed to storage and embedding collaborators
Field names are snake_case in Python and camelCase on the wire
"""
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# EMBEDDING QUEUE PAYLOAD
# =============================================================================

class EmbeddingQueueMessage(BaseModel):
    """One queue item per chunk for the embedding stage"""
    model_config = ConfigDict(populate_by_name=True)

    chunk_id: str = Field(..., alias="chunkId", description="Chunk id")
    document_id: str = Field(..., alias="documentId", description="Owning document id")
    knowledge_base_id: str = Field(..., alias="knowledgeBaseId", description="Knowledge base id")
    agent_id: str = Field(default="", alias="agentId", description="Agent owning the knowledge base")
    content: str = Field(..., description="Chunk text to embed")
    position: int = Field(..., description="Block-then-intra-block ordering key")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Block metadata and strategy flags")

    def to_wire(self) -> Dict[str, Any]:
        """camelCase dict for the queue"""
        return self.model_dump(by_alias=True)


# =============================================================================
# DOCUMENT SUMMARY
# =============================================================================

class ChunkSummaryEntry(BaseModel):
    """Per-chunk line of the document summary"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Chunk id")
    position: int = Field(..., description="Ordering key")
    token_count: int = Field(..., alias="tokenCount", description="Estimated token count")


class DocumentChunkSummary(BaseModel):
    """Stored alongside the chunks to verify downstream embedding completeness"""
    model_config = ConfigDict(populate_by_name=True)

    chunk_count: int = Field(..., alias="chunkCount", description="Number of chunks produced")
    chunk_size: int = Field(..., alias="chunkSize", description="Chunk size used")
    chunk_overlap: int = Field(..., alias="chunkOverlap", description="Overlap used")
    chunks: List[ChunkSummaryEntry] = Field(default_factory=list)

    def is_fully_indexed(self, indexed_count: int, tolerance: float = 0.9) -> bool:
        """
        True when enough chunks reached the index.

        Complete at the expected count, or at `tolerance` of it for
        occasional embedding failures.
        """
        if indexed_count >= self.chunk_count:
            return True
        return indexed_count >= self.chunk_count * tolerance

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
