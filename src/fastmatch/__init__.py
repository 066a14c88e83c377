"""fastmatch: coarse-to-fine pyramid template matching for UI automation.

    import cv2
    from fastmatch import fast_template_matching

    scene = cv2.imread("screen.png", cv2.IMREAD_GRAYSCALE)
    tpl = cv2.imread("button.png", cv2.IMREAD_GRAYSCALE)
    res = fast_template_matching(scene, tpl, strict_threshold=0.9)
    if res:
        print(res.point.x, res.point.y)
"""
from .vision import (
    MatchMethod,
    MatchResult,
    Point,
    SearchParams,
    SearchState,
    fast_template_matching,
    find_template,
)

__version__ = "0.1.0"

__all__ = [
    "MatchMethod",
    "MatchResult",
    "Point",
    "SearchParams",
    "SearchState",
    "fast_template_matching",
    "find_template",
    "__version__",
]
