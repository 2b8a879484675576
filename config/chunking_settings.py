"""
Chunking Heuristic Configuration

Tunable thresholds for block segmentation, comparison-criticality
detection and the chunking strategies. The defaults were tuned
empirically on price lists and catalog exports; override them through
the environment or with set_chunking_settings() in tests.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class ChunkingSettings:
    """Chunking heuristic thresholds"""

    # Regular table chunking
    critical_size_multiplier: int = 3      # Budget multiplier for comparison-critical tables
    min_critical_rows: int = 10            # Rows required before a critical table chunk may close

    # Price table specialization
    price_section_size: int = 15           # Data lines per section chunk

    # Overlapping window
    window_pullback_ratio: float = 0.8     # Word-boundary pull-back may keep >= 80% of the window

    # Table-level criticality (2-of-3 score)
    critical_score_threshold: int = 2
    critical_keyword_threshold: int = 2
    critical_numeric_threshold: int = 5
    critical_column_threshold: float = 2.0

    # Price table confirmation
    min_currency_tokens: int = 3

    # Chunk-level criticality (embedding enrichment)
    chunk_keyword_threshold: int = 2
    chunk_numeric_threshold: int = 3

    # Position keys
    block_position_stride: int = 10000
    price_family_stride: int = 1000

    def with_overrides(self, **overrides) -> "ChunkingSettings":
        """Return a copy with selected thresholds replaced"""
        return replace(self, **overrides)


# Global settings instance
_chunking_settings: Optional[ChunkingSettings] = None


def get_chunking_settings() -> ChunkingSettings:
    """Get or create chunking settings singleton"""
    global _chunking_settings

    if _chunking_settings is None:
        _chunking_settings = ChunkingSettings(
            # Load from environment
            critical_size_multiplier=int(os.environ.get("CRITICAL_SIZE_MULTIPLIER", "3")),
            min_critical_rows=int(os.environ.get("MIN_CRITICAL_ROWS", "10")),
            price_section_size=int(os.environ.get("PRICE_SECTION_SIZE", "15")),
            window_pullback_ratio=float(os.environ.get("WINDOW_PULLBACK_RATIO", "0.8")),
        )

    return _chunking_settings


def set_chunking_settings(settings: Optional[ChunkingSettings]):
    """Set chunking settings (for testing); None resets to environment defaults"""
    global _chunking_settings
    _chunking_settings = settings
