"""
Block Chunker Test Suite
========================
Unit and scenario tests for the chunking pipeline.

Test Categories:
- fixtures/: Sample extracted-text documents
- test_text_analysis / test_structure_analyzer: line and document heuristics
- test_block_segmenter / test_block_classifier: block detection
- test_comparison_detector: criticality verdicts
- test_adaptive_chunking: chunking strategies
- test_document_processor: end-to-end scenarios
- test_embedding_enricher: embedding prefix tags

Usage:
    # Run all tests
    pytest tests/ -v
"""
