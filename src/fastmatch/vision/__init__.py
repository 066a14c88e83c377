"""Vision package: pure image ops and the pyramid search.

Submodules:
- types: Point, SearchRegion, MatchMethod, MatchResult, ...
- pyramid: level selection, level images, coordinate mapping
- correlator: response surface and best match with sign normalization
- roi: search window planning between levels
- search: the level-by-level state machine
- preprocess: image loading and channel conversion
"""
from .errors import InvalidGeometryError, MatchError, TemplateLoadError
from .types import (
    MatchCandidate,
    MatchMethod,
    MatchResult,
    Point,
    SearchRegion,
    SearchState,
    as_image,
)
from .pyramid import build_pyramid, image_at_level, level_size, select_pyramid_level, to_full_resolution
from .correlator import best_match, match_template
from .roi import plan_roi
from .search import SearchController, SearchParams, fast_template_matching, find_template
from .preprocess import load_image, to_bgr, to_gray

__all__ = [
    "InvalidGeometryError",
    "MatchError",
    "TemplateLoadError",
    "MatchCandidate",
    "MatchMethod",
    "MatchResult",
    "Point",
    "SearchRegion",
    "SearchState",
    "as_image",
    "build_pyramid",
    "image_at_level",
    "level_size",
    "select_pyramid_level",
    "to_full_resolution",
    "best_match",
    "match_template",
    "plan_roi",
    "SearchController",
    "SearchParams",
    "fast_template_matching",
    "find_template",
    "load_image",
    "to_bgr",
    "to_gray",
]
