"""
Image loading and light preparation helpers.

Stateless functions used by the screen controller and the CLI before handing
arrays to the search. No color-space tuning happens here: images go to the
matcher in the layout the caller asks for.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union
import logging

import cv2
import numpy as np

from .errors import TemplateLoadError

logger = logging.getLogger(__name__)


def load_image(path: Union[str, Path], gray: bool = False) -> np.ndarray:
    """Read an image file as BGR (or single-channel gray when gray=True).

    Raises TemplateLoadError when the file is missing or cannot be decoded.
    """
    p = Path(path)
    if not p.is_file():
        raise TemplateLoadError(f"Image not found: {p}")
    flag = cv2.IMREAD_GRAYSCALE if gray else cv2.IMREAD_COLOR
    img = cv2.imread(str(p), flag)
    if img is None or img.size == 0:
        raise TemplateLoadError(f"Image could not be decoded: {p}")
    logger.debug("preprocess: loaded %s shape=%s", p.name, img.shape)
    return img


def to_gray(img: np.ndarray) -> np.ndarray:
    """Convert BGR/BGRA to single channel; single-channel input is returned as is."""
    if img.ndim == 2:
        return img
    channels = img.shape[2]
    if channels == 1:
        return img[:, :, 0]
    if channels == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


def to_bgr(img: np.ndarray) -> np.ndarray:
    """Drop the alpha channel of a BGRA frame (mss grabs are BGRA)."""
    if img.ndim == 3 and img.shape[2] == 4:
        return np.ascontiguousarray(img[:, :, :3])
    return img

