"""Config subpackage.

- matching: central knobs for thresholds, pyramid limits, and toggles
"""
# Import matching configuration explicitly to avoid F403
from .matching import (
    DEFAULT_WEAK_THRESHOLD,
    DEFAULT_STRICT_THRESHOLD,
    MAX_LEVEL_AUTO,
    MAX_PYRAMID_LEVEL,
    MIN_LEVEL_DIM,
    ROI_SPAN,
    PERF_ENABLED,
    ALLOW_LEVEL_ZERO,
    ALLOW_LEVEL_ZERO_ENV,
)

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
