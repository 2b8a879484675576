#!/usr/bin/env python3
"""
Semantic Block Segmenter Tests
==============================
Run with:
    pytest tests/test_block_segmenter.py -v
"""
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from blockchunker.documents.block_classifier import BlockType
from blockchunker.documents.block_segmenter import (
    BOUNDARY_RULES,
    BlockSegmenter,
    BoundaryContext,
    SemanticBlock,
)
from tests.fixtures.sample_documents import PRICE_TABLE_TEXT, TWO_PARAGRAPHS_TEXT


class TestSemanticBlock(unittest.TestCase):
    """Tests for the SemanticBlock record"""

    def test_content_lines_trim_blank_edges(self):
        block = SemanticBlock(lines=["", "  ", "first", "", "second", ""])
        self.assertEqual(block.content_lines, ["first", "", "second"])
        self.assertEqual(block.text, "first\n\nsecond")

    def test_empty_block(self):
        self.assertTrue(SemanticBlock(lines=["", "   "]).is_empty)
        self.assertFalse(SemanticBlock(lines=["x"]).is_empty)


class TestBlockSegmenter(unittest.TestCase):
    """Tests for boundary detection"""

    def setUp(self):
        self.segmenter = BlockSegmenter()

    def test_empty_input(self):
        self.assertEqual(self.segmenter.segment([]), [])

    def test_double_blank_splits(self):
        blocks = self.segmenter.segment(TWO_PARAGRAPHS_TEXT.split("\n"))
        self.assertEqual(len(blocks), 2)
        self.assertEqual(blocks[0].start_index, 0)
        self.assertEqual(blocks[0].end_index, 2)
        self.assertEqual(blocks[1].start_index, 3)
        self.assertEqual(blocks[1].end_index, 5)
        self.assertTrue(blocks[1].text.startswith("Second paragraph"))

    def test_single_blank_does_not_split(self):
        blocks = self.segmenter.segment(["one sentence here.", "", "another sentence here."])
        self.assertEqual(len(blocks), 1)

    def test_price_table_stays_together(self):
        lines = PRICE_TABLE_TEXT.split("\n")
        blocks = self.segmenter.segment(lines)
        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].type, BlockType.TABLE)
        self.assertEqual(blocks[0].end_index, len(lines) - 1)

    def test_section_marker_splits(self):
        blocks = self.segmenter.segment(["Intro text here.", "---", "more text here."])
        self.assertEqual(len(blocks), 2)
        self.assertEqual(blocks[0].lines, ["Intro text here."])
        self.assertEqual(blocks[1].lines, ["---", "more text here."])

    def test_marker_inside_table_keeps_block(self):
        lines = [
            "ID  Unidad  Precio",
            "101  Casa  $100",
            "102  Casa  $200",
            "***",
            "103  Casa  $300",
        ]
        blocks = self.segmenter.segment(lines)
        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].type, BlockType.TABLE)

    def test_header_after_content_splits(self):
        blocks = self.segmenter.segment([
            "some prose sentence here.",
            "Pricing Overview",
            "more prose follows here.",
        ])
        self.assertEqual(len(blocks), 2)
        self.assertEqual(blocks[1].lines[0], "Pricing Overview")

    def test_indices_cover_all_lines(self):
        lines = TWO_PARAGRAPHS_TEXT.split("\n") + ["---"] + PRICE_TABLE_TEXT.split("\n")
        blocks = self.segmenter.segment(lines)

        self.assertEqual(blocks[0].start_index, 0)
        self.assertEqual(blocks[-1].end_index, len(lines) - 1)
        for previous, current in zip(blocks, blocks[1:]):
            self.assertEqual(current.start_index, previous.end_index + 1)
        self.assertEqual(sum(len(b.lines) for b in blocks), len(lines))

    def test_blocks_are_classified(self):
        blocks = self.segmenter.segment(TWO_PARAGRAPHS_TEXT.split("\n"))
        for block in blocks:
            self.assertEqual(block.type, BlockType.PARAGRAPH)
            self.assertIn("language", block.metadata)

    def test_no_rules_single_block(self):
        segmenter = BlockSegmenter(rules=[])
        blocks = segmenter.segment(TWO_PARAGRAPHS_TEXT.split("\n"))
        self.assertEqual(len(blocks), 1)


class TestBoundaryRules(unittest.TestCase):
    """Rule ordering"""

    def test_rule_order(self):
        names = [rule.name for rule in BOUNDARY_RULES]
        self.assertEqual(names, ["double_blank", "table_continuity", "section_marker", "header_transition"])

    def test_table_continuity_outranks_header_transition(self):
        segmenter = BlockSegmenter()
        ctx = BoundaryContext(
            current="102  Casa  $200",
            previous="ID  Unidad  Precio",
            block_lines=["ID  Unidad  Precio"],
            block_type=lambda: BlockType.UNKNOWN,
        )
        self.assertFalse(segmenter.is_boundary(ctx))


if __name__ == "__main__":
    unittest.main()
