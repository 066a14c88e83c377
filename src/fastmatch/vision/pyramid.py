"""
Pyramid level selection and level image access.

Two downsampling strategies live here:

- image_at_level: one cv2.resize straight from the full-size image to the level's
  size. This is what the search uses; it is fast but aliases fine detail
  more than a blurred pyramid would.
- build_pyramid: the classic chained cv2.pyrDown pyramid (blur then
  subsample, level by level). Available to callers, not used by the search.

All functions are pure.
"""
from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import cv2
import numpy as np

from ..config.matching import MAX_PYRAMID_LEVEL, MIN_LEVEL_DIM
from .types import Point


def select_pyramid_level(scene_shape: Sequence[int], template_shape: Sequence[int]) -> int:
    """Coarsest level at which the smallest side still keeps ~MIN_LEVEL_DIM samples.

    Shapes are numpy-style (rows, cols, ...). Result is in [0, MAX_PYRAMID_LEVEL].
    """
    min_dim = min(int(scene_shape[0]), int(scene_shape[1]), int(template_shape[0]), int(template_shape[1]))
    if min_dim < MIN_LEVEL_DIM:
        return 0
    level = int(math.floor(math.log2(min_dim / MIN_LEVEL_DIM)))
    if level < 0:
        return 0
    return min(MAX_PYRAMID_LEVEL, level)


def level_size(width: int, height: int, level: int) -> Tuple[int, int]:
    """(width, height) after `level` halvings, rounding odd sizes up."""
    for _ in range(level):
        width = (width + 1) // 2
        height = (height + 1) // 2
    return width, height


def image_at_level(image: np.ndarray, level: int) -> np.ndarray:
    """Return the image resampled to pyramid `level` (level 0 is the image itself)."""
    if level == 0:
        return image
    h, w = image.shape[:2]
    cols, rows = level_size(w, h, level)
    return cv2.resize(image, (cols, rows))


def build_pyramid(image: np.ndarray, max_level: int) -> List[np.ndarray]:
    """Chained Gaussian pyramid [level0, level1, ..., level max_level]."""
    pyramid = [image]
    for _ in range(max_level):
        h, w = image.shape[:2]
        image = cv2.pyrDown(image, dstsize=((w + 1) // 2, (h + 1) // 2))
        pyramid.append(image)
    return pyramid


def to_full_resolution(point: Point, level: int) -> Point:
    """Map a point found at `level` back to level-0 coordinates."""
    return point.scaled(2 ** level)
