"""Value types shared by the pyramid search modules.

Images are plain numpy arrays; everything else is a small frozen dataclass or
enum so values can be passed between levels without aliasing surprises.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import cv2
import numpy as np


def as_image(arr: np.ndarray) -> np.ndarray:
    """Validate a pixel buffer and return a read-only view of it.

    Accepts 2D (single channel) or 3D (H, W, C) arrays of uint8 or float32;
    float64 input is converted to float32 since OpenCV correlation does not
    take it.
    """
    if not isinstance(arr, np.ndarray):
        raise ValueError(f"expected numpy array, got {type(arr).__name__}")
    if arr.ndim not in (2, 3):
        raise ValueError(f"image must be 2D or 3D, got ndim={arr.ndim}")
    if arr.shape[0] <= 0 or arr.shape[1] <= 0:
        raise ValueError(f"image must have positive width and height, got shape={arr.shape}")
    if arr.dtype == np.float64:
        arr = arr.astype(np.float32)
    elif arr.dtype not in (np.uint8, np.float32):
        raise ValueError(f"unsupported pixel type {arr.dtype}; use uint8 or float32")
    view = arr.view()
    view.flags.writeable = False
    return view


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def scaled(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class SearchRegion:
    """Axis-aligned window (x, y, width, height) inside one level's scene."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contained_in(self, shape: Tuple[int, ...]) -> bool:
        """True when the region lies inside an image of the given (h, w, ...) shape."""
        h, w = shape[:2]
        return (
            self.x >= 0
            and self.y >= 0
            and self.width >= 1
            and self.height >= 1
            and self.right <= w
            and self.bottom <= h
        )

    def crop(self, image: np.ndarray) -> np.ndarray:
        return image[self.y : self.bottom, self.x : self.right]


class MatchMethod(Enum):
    """Closed set of OpenCV scoring methods.

    normalize() is the only place the comparison direction is handled; past
    it every score is higher-is-better.
    """

    CCOEFF_NORMED = "ccoeff_normed"
    CCOEFF = "ccoeff"
    CCORR_NORMED = "ccorr_normed"
    CCORR = "ccorr"
    SQDIFF = "sqdiff"
    SQDIFF_NORMED = "sqdiff_normed"

    @property
    def cv2_flag(self) -> int:
        return _CV2_FLAGS[self]

    @property
    def smaller_is_better(self) -> bool:
        return self in (MatchMethod.SQDIFF, MatchMethod.SQDIFF_NORMED)

    def normalize(
        self,
        min_val: float,
        min_loc: Tuple[int, int],
        max_val: float,
        max_loc: Tuple[int, int],
    ) -> Tuple[Tuple[int, int], float]:
        """Pick (location, score) from a minMaxLoc result for this method."""
        if self.smaller_is_better:
            return min_loc, -float(min_val)
        return max_loc, float(max_val)

    @classmethod
    def parse(cls, value: "str | MatchMethod") -> "MatchMethod":
        """Resolve a method from a member, its name, its value, or a cv2-style alias."""
        if isinstance(value, MatchMethod):
            return value
        key = str(value).strip().lower()
        if key.startswith("tm_"):
            key = key[3:]
        key = key.replace("-", "_")
        key = _ALIASES.get(key, key)
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"unknown match method: {value!r}")


_CV2_FLAGS = {
    MatchMethod.CCOEFF_NORMED: cv2.TM_CCOEFF_NORMED,
    MatchMethod.CCOEFF: cv2.TM_CCOEFF,
    MatchMethod.CCORR_NORMED: cv2.TM_CCORR_NORMED,
    MatchMethod.CCORR: cv2.TM_CCORR,
    MatchMethod.SQDIFF: cv2.TM_SQDIFF,
    MatchMethod.SQDIFF_NORMED: cv2.TM_SQDIFF_NORMED,
}

_ALIASES = {
    "correlation_coefficient_normalized": "ccoeff_normed",
    "ccoeff_norm": "ccoeff_normed",
    "sum_squared_difference": "sqdiff",
    "sum_squared_difference_normalized": "sqdiff_normed",
    "sqdiff_norm": "sqdiff_normed",
    "ccorr_norm": "ccorr_normed",
}


@dataclass(frozen=True)
class MatchCandidate:
    """Best location so far; `level` is the pyramid level `point` is expressed in."""

    point: Point
    score: float
    level: int = 0


class SearchState(Enum):
    SEARCHING = "searching"
    TRACKING = "tracking"
    ESCALATED = "escalated"
    LOST = "lost"
    EXHAUSTED = "exhausted"

    @property
    def terminal(self) -> bool:
        return self in (SearchState.ESCALATED, SearchState.LOST, SearchState.EXHAUSTED)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one search call.

    found is False whenever point is None; reason names why for misses:
    "refused", "track_lost", "invalid_geometry" or "below_strict".
    """

    state: SearchState
    point: Optional[Point] = None
    score: float = 0.0
    level: int = 0
    reason: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.point is not None

    def __bool__(self) -> bool:
        return self.found
