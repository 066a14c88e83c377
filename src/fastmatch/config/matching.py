"""
Matching configuration knobs centralization.

Threshold defaults, pyramid limits and environment toggles live here. The
search modules import from this module instead of hardcoding values.
"""
from __future__ import annotations

import os

# Thresholds (scores are always higher-is-better after normalization)
DEFAULT_WEAK_THRESHOLD: float = 0.75
DEFAULT_STRICT_THRESHOLD: float = 0.9

# Pyramid limits
MAX_LEVEL_AUTO: int = -1
MAX_PYRAMID_LEVEL: int = 6
MIN_LEVEL_DIM: int = 7  # smallest side kept at the coarsest level

# Region of interest: search window spans this many template sizes
ROI_SPAN: float = 1.5

# Environment flags
PERF_ENABLED: bool = os.environ.get("FM_MATCH_PERF", "0") == "1"
ALLOW_LEVEL_ZERO_ENV: str = "FM_ALLOW_LEVEL_ZERO_SEARCH"  # also ConfigManager "allow_level_zero_search"
ALLOW_LEVEL_ZERO: bool = os.environ.get(ALLOW_LEVEL_ZERO_ENV, "0") == "1"

__all__ = [
    "DEFAULT_WEAK_THRESHOLD",
    "DEFAULT_STRICT_THRESHOLD",
    "MAX_LEVEL_AUTO",
    "MAX_PYRAMID_LEVEL",
    "MIN_LEVEL_DIM",
    "ROI_SPAN",
    "PERF_ENABLED",
    "ALLOW_LEVEL_ZERO",
    "ALLOW_LEVEL_ZERO_ENV",
]
