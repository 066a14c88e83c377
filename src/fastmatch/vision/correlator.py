"""
Correlation primitives: response surface plus best-match extraction.

match_template wraps cv2.matchTemplate with a geometry check; best_match
adds cv2.minMaxLoc and the method's sign convention so callers always get a
higher-is-better score.
"""
from __future__ import annotations

import logging

import cv2
import numpy as np

from .errors import InvalidGeometryError
from .types import MatchCandidate, MatchMethod, Point

logger = logging.getLogger(__name__)


def _channels(img: np.ndarray) -> int:
    return 1 if img.ndim == 2 else int(img.shape[2])


def match_template(scene: np.ndarray, template: np.ndarray, method: MatchMethod = MatchMethod.CCOEFF_NORMED) -> np.ndarray:
    """Return the float32 response surface of shape (H - h + 1, W - w + 1).

    Raises InvalidGeometryError when the template does not fit inside the
    scene, the channel counts differ or the pixel types differ.
    """
    sh, sw = scene.shape[:2]
    th, tw = template.shape[:2]
    if sh < th or sw < tw or th <= 0 or tw <= 0 or _channels(scene) != _channels(template):
        raise InvalidGeometryError(scene.shape, template.shape)
    if scene.dtype != template.dtype:
        raise InvalidGeometryError(
            scene.shape,
            template.shape,
            f"template pixel type {template.dtype} does not match scene pixel type {scene.dtype}",
        )
    return cv2.matchTemplate(scene, template, method.cv2_flag)


def best_match(
    scene: np.ndarray,
    template: np.ndarray,
    method: MatchMethod = MatchMethod.CCOEFF_NORMED,
    level: int = 0,
) -> MatchCandidate:
    """Best location of `template` in `scene` with a higher-is-better score.

    The point is relative to `scene` (callers searching a sub-region add the
    region origin themselves).
    """
    result = match_template(scene, template, method)
    min_val, max_val, min_loc, max_loc = cv2.minMaxLoc(result)
    loc, score = method.normalize(min_val, min_loc, max_val, max_loc)
    logger.debug("correlator: level=%d method=%s loc=%s score=%.4f", level, method.value, loc, score)
    return MatchCandidate(Point(int(loc[0]), int(loc[1])), score, level)
