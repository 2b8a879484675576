"""
Pytest Configuration for Block Chunker Tests
============================================
Shared fixtures and configuration for all test modules.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def default_chunking_settings():
    """Every test starts from default thresholds, not the environment"""
    from config.chunking_settings import ChunkingSettings, set_chunking_settings
    set_chunking_settings(ChunkingSettings())
    yield
    set_chunking_settings(None)


@pytest.fixture(scope="session")
def price_table_text():
    """40-line price table document"""
    from tests.fixtures.sample_documents import PRICE_TABLE_TEXT
    return PRICE_TABLE_TEXT


@pytest.fixture
def processor():
    """DocumentProcessor with default sizes, sequential"""
    from blockchunker.documents.document_processor import DocumentProcessor
    return DocumentProcessor(chunk_size=1000, chunk_overlap=200, max_workers=1, annotate_structure=False)


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """Configure pytest markers"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "scenario: end-to-end document scenarios"
    )
