"""
Test Fixtures Module
====================
Contains sample extracted-text documents.
"""

from .sample_documents import (
    PRICE_TABLE_HEADER,
    PRICE_TABLE_PRICES,
    PRICE_TABLE_ROWS,
    PRICE_TABLE_TEXT,
    PROSE_LINES,
    PROSE_TEXT,
    TWO_PARAGRAPHS_TEXT,
    LIST_CONTEXT_LINES,
    LIST_ITEMS,
    LIST_TEXT,
    PLAIN_TABLE_HEADER,
    PLAIN_TABLE_ROWS,
    CATALOG_TABLE_HEADER,
    CATALOG_TABLE_ROWS,
)

__all__ = [
    "PRICE_TABLE_HEADER",
    "PRICE_TABLE_PRICES",
    "PRICE_TABLE_ROWS",
    "PRICE_TABLE_TEXT",
    "PROSE_LINES",
    "PROSE_TEXT",
    "TWO_PARAGRAPHS_TEXT",
    "LIST_CONTEXT_LINES",
    "LIST_ITEMS",
    "LIST_TEXT",
    "PLAIN_TABLE_HEADER",
    "PLAIN_TABLE_ROWS",
    "CATALOG_TABLE_HEADER",
    "CATALOG_TABLE_ROWS",
]
