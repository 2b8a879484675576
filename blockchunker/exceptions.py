"""
Chunking Exceptions

Errors escalated to the caller. Everything else the pipeline meets is
absorbed locally with a log line and a safe default.
"""


class BlockChunkerError(Exception):
    """Base exception for the chunking core."""
    pass


class ConfigurationError(BlockChunkerError):
    """Invalid chunk size / overlap configuration."""
    pass


class ChunkingError(BlockChunkerError):
    """Error during text chunking."""
    pass


class NoChunksProducedError(ChunkingError):
    """The whole document yielded zero chunks."""

    def __init__(self, document_id: str, reason: str = "no chunks could be created"):
        self.document_id = document_id
        self.reason = reason
        super().__init__(f"Document {document_id}: {reason}")
