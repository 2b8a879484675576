"""Document chunking module"""
from .document_processor import DocumentProcessor, ProcessingResult, normalize_text, build_queue_messages
from .embedding_enricher import EmbeddingEnricher, EnrichmentSettings

__all__ = [
    'DocumentProcessor',
    'ProcessingResult',
    'normalize_text',
    'build_queue_messages',
    'EmbeddingEnricher',
    'EnrichmentSettings',
]
