"""Screen matching front-end.

Responsibility:
- Thin orchestration for screen capture (IO) and calling the pure pyramid
  search in fastmatch.vision.
- Translate match points from frame coordinates to absolute screen
  coordinates.
- Structured logging: DEBUG for grab/match timings and scores.
- Optionally save the captured frame on a miss (see core.logging_setup).

The search itself stays a pure function of two arrays.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, Union
import logging
import threading
import time

import cv2
import mss
import numpy as np

from ..config.matching import PERF_ENABLED
from ..vision.preprocess import load_image, to_bgr, to_gray
from ..vision.search import SearchParams, fast_template_matching
from ..vision.types import MatchResult

logger = logging.getLogger(__name__)

TemplateLike = Union[str, Path, np.ndarray]


class ScreenMatcher:
    """Find templates on the live screen.

    monitor: mss monitor index (0 = whole virtual screen, 1 = primary).
    gray: match single-channel frames/templates instead of BGR.
    """

    def __init__(
        self,
        params: Optional[SearchParams] = None,
        monitor: int = 1,
        gray: bool = True,
        artifacts_dir: Optional[Path] = None,
    ) -> None:
        self._tls = threading.local()
        self.params = params or SearchParams()
        self.monitor = int(monitor)
        self.gray = gray
        self.artifacts_dir = Path(artifacts_dir) if artifacts_dir else None
        self.last_perf: dict = {}

    # --------------------------- screen capture ---------------------------
    def _get_sct(self, force_new: bool = False):
        sct = getattr(self._tls, "sct", None)
        if force_new or sct is None:
            if sct is not None and hasattr(sct, "close"):
                try:
                    sct.close()
                except Exception:
                    pass
            sct = mss.mss()
            self._tls.sct = sct
        return sct

    def _safe_grab(self, region: dict):
        sct = self._get_sct()
        try:
            return sct.grab(region)
        except AttributeError:
            # mss handles are thread-bound; a stale one raises AttributeError
            sct = self._get_sct(force_new=True)
            return sct.grab(region)

    def monitor_region(self) -> dict:
        """Absolute {left, top, width, height} of the configured monitor."""
        monitors = self._get_sct().monitors
        idx = self.monitor if 0 <= self.monitor < len(monitors) else 0
        mon = monitors[idx]
        return {k: int(mon[k]) for k in ("left", "top", "width", "height")}

    def capture(self, region: Optional[dict] = None) -> np.ndarray:
        """Grab a frame (gray or BGR per self.gray) for an absolute region."""
        region = region or self.monitor_region()
        t0 = time.perf_counter()
        frame = np.array(self._safe_grab(region))  # BGRA
        t1 = time.perf_counter()
        if PERF_ENABLED or logger.isEnabledFor(logging.DEBUG):
            logger.debug("screen: grab %.1fms region=%s", (t1 - t0) * 1000.0, str(region))
        return to_gray(frame) if self.gray else to_bgr(frame)

    def load_template(self, template: TemplateLike) -> np.ndarray:
        if isinstance(template, np.ndarray):
            return to_gray(template) if self.gray else to_bgr(template)
        return load_image(template, gray=self.gray)

    # --------------------------- public API ---------------------------
    def find(
        self,
        template: TemplateLike,
        region: Optional[dict] = None,
        params: Optional[SearchParams] = None,
    ) -> MatchResult:
        """Search the screen (or `region`) for `template`.

        The returned point is the template's top-left corner in absolute
        screen coordinates.
        """
        tpl = self.load_template(template)
        region = region or self.monitor_region()
        frame = self.capture(region)

        t0 = time.perf_counter()
        res = fast_template_matching(frame, tpl, params or self.params)
        t1 = time.perf_counter()
        self.last_perf = {"match_ms": (t1 - t0) * 1000.0, "region": dict(region), "state": res.state.value}
        logger.debug(
            "screen: match %.1fms found=%s score=%.3f state=%s",
            (t1 - t0) * 1000.0, res.found, res.score, res.state.value,
        )

        if not res.found:
            self._save_miss(frame)
            return res
        return replace(res, point=res.point.offset(int(region["left"]), int(region["top"])))

    def find_center(
        self,
        template: TemplateLike,
        region: Optional[dict] = None,
        params: Optional[SearchParams] = None,
    ) -> Optional[Tuple[int, int]]:
        """Absolute (x, y) of the matched template's center, or None on a miss."""
        tpl = self.load_template(template)
        res = self.find(tpl, region, params)
        if not res.found:
            return None
        th, tw = tpl.shape[:2]
        return int(res.point.x + tw // 2), int(res.point.y + th // 2)

    def _save_miss(self, frame: np.ndarray) -> Optional[Path]:
        if self.artifacts_dir is None:
            return None
        out = self.artifacts_dir / datetime.now().strftime("miss-%Y%m%d_%H%M%S_%f.png")
        try:
            self.artifacts_dir.mkdir(parents=True, exist_ok=True)
            cv2.imwrite(str(out), frame)
        except (OSError, cv2.error) as e:
            logger.warning("screen: could not save miss artifact %s: %s", out, e)
            return None
        logger.debug("screen: saved miss artifact %s", out)
        return out

    def close(self) -> None:
        sct = getattr(self._tls, "sct", None)
        if sct is not None:
            sct.close()
            self._tls.sct = None
