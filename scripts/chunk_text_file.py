#!/usr/bin/env python3
"""
Chunk Text Files
================
Runs the chunking pipeline over extracted UTF-8 text files and prints a
per-document summary.

Features:
- Single files or whole directories (*.txt)
- Chunk size / overlap / worker overrides
- Optional JSON dump of the embedding queue messages
- Optional preview of the enriched embedding text

Usage:
    python scripts/chunk_text_file.py documents/price_list.txt
    python scripts/chunk_text_file.py documents/ --chunk-size 800 --overlap 100
    python scripts/chunk_text_file.py price_list.txt --json out.json --enrich
"""
import os
import sys
import json
import logging
import argparse
from pathlib import Path
from typing import List

from tqdm import tqdm

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blockchunker.documents import DocumentProcessor, EmbeddingEnricher
from blockchunker.exceptions import BlockChunkerError
from config.settings import CHUNK_OVERLAP, CHUNK_SIZE, CHUNK_WORKERS

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def collect_files(paths: List[str]) -> List[Path]:
    """Expand directories into their *.txt files"""
    files = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(sorted(path.rglob("*.txt")))
        elif path.is_file():
            files.append(path)
        else:
            logger.warning(f"Not found: {path}")
    return files


def main():
    parser = argparse.ArgumentParser(description="Chunk extracted text files")
    parser.add_argument("paths", nargs="+", help="Text files or directories")
    parser.add_argument(
        "--chunk-size", type=int, default=CHUNK_SIZE,
        help="Target chunk size in characters"
    )
    parser.add_argument(
        "--overlap", type=int, default=CHUNK_OVERLAP,
        help="Sliding-window overlap in characters"
    )
    parser.add_argument(
        "--workers", type=int, default=CHUNK_WORKERS,
        help="Threads used to chunk blocks"
    )
    parser.add_argument(
        "--knowledge-base", default="local",
        help="Knowledge base id stamped on every chunk"
    )
    parser.add_argument(
        "--json", dest="json_path",
        help="Write embedding queue messages to this file"
    )
    parser.add_argument(
        "--enrich", action="store_true",
        help="Print the enriched embedding text of the first chunks"
    )
    args = parser.parse_args()

    files = collect_files(args.paths)
    if not files:
        print("❌ No text files found")
        sys.exit(1)

    processor = DocumentProcessor(
        chunk_size=args.chunk_size,
        chunk_overlap=args.overlap,
        max_workers=args.workers,
    )
    enricher = EmbeddingEnricher() if args.enrich else None

    print("=" * 60)
    print("BLOCK CHUNKING")
    print("=" * 60)

    messages = []
    failed = 0

    for path in tqdm(files, desc="Chunking"):
        text = path.read_text(encoding="utf-8", errors="replace")
        try:
            result = processor.process(text, document_id=path.stem, knowledge_base_id=args.knowledge_base)
        except BlockChunkerError as e:
            failed += 1
            print(f"✗ {path.name}: {e}")
            continue

        type_counts = {}
        for chunk in result.chunks:
            block_type = chunk.metadata.get("block_type", "unknown")
            type_counts[block_type] = type_counts.get(block_type, 0) + 1

        print(f"\n✓ {path.name}")
        print(f"  Structure: {result.structure.structure_type} ({result.structure.confidence:.2f})")
        print(f"  Blocks: {result.block_count}  Chunks: {result.chunk_count}")
        print(f"  By block type: {type_counts}")

        if enricher:
            for chunk in result.chunks[:3]:
                preview = enricher.enrich(chunk.content)[:300]
                print(f"\n  --- {chunk.id} ---\n  {preview}")

        messages.extend(message.to_wire() for message in result.to_queue_messages())

    if args.json_path:
        with open(args.json_path, "w", encoding="utf-8") as f:
            json.dump(messages, f, ensure_ascii=False, indent=2)
        print(f"\n📄 {len(messages)} queue messages written to {args.json_path}")

    print("\n" + "=" * 60)
    print(f"Processed: {len(files) - failed}/{len(files)} files, {len(messages)} chunks")
    print("=" * 60)

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
