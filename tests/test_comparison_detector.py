#!/usr/bin/env python3
"""
Comparison-Criticality Tests
============================
Run with:
    pytest tests/test_comparison_detector.py -v
"""
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from blockchunker.documents.comparison_detector import (
    ComparisonDetector,
    count_currency_amounts,
    count_keywords,
    PRICE_INDICATORS,
)
from config.chunking_settings import ChunkingSettings, get_chunking_settings, set_chunking_settings
from tests.fixtures.sample_documents import (
    CATALOG_TABLE_HEADER,
    CATALOG_TABLE_ROWS,
    PLAIN_TABLE_HEADER,
    PLAIN_TABLE_ROWS,
    PRICE_TABLE_HEADER,
    PRICE_TABLE_ROWS,
    PROSE_LINES,
)


class TestHelpers(unittest.TestCase):

    def test_keywords_counted_once(self):
        self.assertEqual(count_keywords("Precio precio PRECIO", PRICE_INDICATORS), 1)

    def test_currency_amounts(self):
        self.assertEqual(count_currency_amounts("$100 and $ 2,500.50 but not 300"), 2)


class TestTableCriticality(unittest.TestCase):
    """Tests for the 2-of-3 table score"""

    def setUp(self):
        self.detector = ComparisonDetector(ChunkingSettings())

    def test_price_table_is_critical(self):
        self.assertTrue(self.detector.table_criticality([PRICE_TABLE_HEADER], PRICE_TABLE_ROWS))

    def test_catalog_is_critical(self):
        self.assertTrue(self.detector.table_criticality([CATALOG_TABLE_HEADER], CATALOG_TABLE_ROWS))

    def test_plain_table_not_critical(self):
        signals = self.detector.table_signals([PLAIN_TABLE_HEADER], PLAIN_TABLE_ROWS)
        self.assertEqual(signals["score"], 1)
        self.assertEqual(signals["numeric_tokens"], 0)
        self.assertFalse(self.detector.table_criticality([PLAIN_TABLE_HEADER], PLAIN_TABLE_ROWS))

    def test_prose_not_critical(self):
        self.assertFalse(self.detector.table_criticality([PROSE_LINES[0]], PROSE_LINES[1:]))

    def test_adding_signal_rows_never_lowers_verdict(self):
        header = ["Name  Notes"]
        rows = ["alpha  beta"]
        self.assertFalse(self.detector.table_criticality(header, rows))

        rows = rows + ["Precio  Unidad", "101  $100", "102  $200", "103  $300"]
        self.assertTrue(self.detector.table_criticality(header, rows))

    def test_empty_table(self):
        signals = self.detector.table_signals([], [])
        self.assertEqual(signals["average_columns"], 0.0)
        self.assertEqual(signals["score"], 0)


class TestPriceTable(unittest.TestCase):
    """Tests for the price-table verdict"""

    def setUp(self):
        self.detector = ComparisonDetector(ChunkingSettings())

    def test_price_table(self):
        self.assertTrue(self.detector.is_price_table([PRICE_TABLE_HEADER], PRICE_TABLE_ROWS))

    def test_no_currency_amounts(self):
        rows = ["101  Casa  100", "102  Casa  200", "103  Casa  300"]
        self.assertFalse(self.detector.is_price_table([PRICE_TABLE_HEADER], rows))

    def test_too_few_amounts(self):
        rows = ["101  Casa  $100", "102  Casa  $200"]
        self.assertFalse(self.detector.is_price_table([PRICE_TABLE_HEADER], rows))

    def test_catalog_is_not_price_table(self):
        self.assertFalse(self.detector.is_price_table([CATALOG_TABLE_HEADER], CATALOG_TABLE_ROWS))

    def test_threshold_override(self):
        detector = ComparisonDetector(ChunkingSettings().with_overrides(min_currency_tokens=100))
        self.assertFalse(detector.is_price_table([PRICE_TABLE_HEADER], PRICE_TABLE_ROWS))

    def test_evaluate(self):
        result = self.detector.evaluate([PRICE_TABLE_HEADER], PRICE_TABLE_ROWS)
        self.assertTrue(result.is_critical)
        self.assertTrue(result.is_price_table)
        self.assertEqual(result.signals["currency_amounts"], len(PRICE_TABLE_ROWS))
        self.assertGreaterEqual(result.signals["score"], 2)


class TestChunkLevelCriticality(unittest.TestCase):
    """Tests for is_comparison_critical_content"""

    def setUp(self):
        self.detector = ComparisonDetector(ChunkingSettings())

    def test_critical_content(self):
        self.assertTrue(self.detector.is_comparison_critical_content("Precio total: $100, $200, $300"))

    def test_not_critical(self):
        self.assertFalse(self.detector.is_comparison_critical_content("hello world"))
        self.assertFalse(self.detector.is_comparison_critical_content(""))

    def test_numbers_without_keywords(self):
        self.assertFalse(self.detector.is_comparison_critical_content("rolled 4, 8 and 15 today"))


class TestChunkingSettings(unittest.TestCase):

    def test_with_overrides_copies(self):
        base = ChunkingSettings()
        changed = base.with_overrides(price_section_size=5)
        self.assertEqual(changed.price_section_size, 5)
        self.assertEqual(base.price_section_size, 15)

    def test_set_and_get(self):
        custom = ChunkingSettings(min_critical_rows=4)
        set_chunking_settings(custom)
        self.assertIs(get_chunking_settings(), custom)
        self.assertEqual(ComparisonDetector().settings.min_critical_rows, 4)


if __name__ == "__main__":
    unittest.main()
