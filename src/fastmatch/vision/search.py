"""
Coarse-to-fine pyramid template search.

The search is a small state machine driven one pyramid level at a time:

    SEARCHING --blind search at start level--> TRACKING
    TRACKING  --ROI score < weak-------------> LOST       (not found)
    TRACKING  --ROI score >= strict----------> ESCALATED  (point scaled to level 0)
    TRACKING  --level 0 done-----------------> EXHAUSTED  (found iff score >= strict)
    SEARCHING --continuation rule refuses----> LOST       (not found)

Only the start level gets a whole-image search; every finer level searches a
window planned from the previous level's point (see roi.plan_roi). A blind
result below the weak threshold is still tracked; the weak threshold only
ends the search once refinement has started.

Known behaviour:
- When the selected start level is 0 (smallest side under 14 px) the
  continuation rule refuses to search at all, so small inputs are always
  "not found". SearchParams.allow_level_zero_search opts out.
- The rule's `level == start - 1` branch can only be evaluated on the first
  step, where level == start, so it never fires.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Optional

import numpy as np

from ..config.matching import (
    ALLOW_LEVEL_ZERO,
    DEFAULT_STRICT_THRESHOLD,
    DEFAULT_WEAK_THRESHOLD,
    MAX_LEVEL_AUTO,
    MAX_PYRAMID_LEVEL,
)
from ..core.timing import SplitTimer
from .correlator import best_match
from .errors import InvalidGeometryError
from .pyramid import image_at_level, select_pyramid_level, to_full_resolution
from .roi import plan_roi
from .types import MatchCandidate, MatchMethod, MatchResult, SearchState, as_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchParams:
    """Per-call search configuration.

    weak_threshold <= strict_threshold is the caller's job; it is not checked.
    max_level is a level in [0, 6] or MAX_LEVEL_AUTO.
    """

    method: MatchMethod = MatchMethod.CCOEFF_NORMED
    weak_threshold: float = DEFAULT_WEAK_THRESHOLD
    strict_threshold: float = DEFAULT_STRICT_THRESHOLD
    max_level: int = MAX_LEVEL_AUTO
    allow_level_zero_search: bool = ALLOW_LEVEL_ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", MatchMethod.parse(self.method))
        if self.max_level != MAX_LEVEL_AUTO and not 0 <= int(self.max_level) <= MAX_PYRAMID_LEVEL:
            raise ValueError(f"max_level must be in [0, {MAX_PYRAMID_LEVEL}] or MAX_LEVEL_AUTO, got {self.max_level}")


class SearchController:
    """Runs one search; create a new controller per call."""

    def __init__(self, scene: np.ndarray, template: np.ndarray, params: Optional[SearchParams] = None) -> None:
        self.scene = as_image(scene)
        self.template = as_image(template)
        self.params = params or SearchParams()
        self.timer = SplitTimer("fast_tm", logger)

        if self.params.max_level == MAX_LEVEL_AUTO:
            self.start_level = select_pyramid_level(self.scene.shape, self.template.shape)
            self.timer.add_split(f"select_pyramid_level:{self.start_level}")
        else:
            self.start_level = int(self.params.max_level)

        self.state = SearchState.SEARCHING
        self.level = self.start_level
        self.candidate: Optional[MatchCandidate] = None
        self.last_score = 0.0
        self.reason: Optional[str] = None

    def should_search_blind(self, level: int) -> bool:
        """Continuation rule for the whole-image search (no candidate yet)."""
        start = self.start_level
        if level == start and level != 0:
            return True
        if level == 0 and start == 0 and self.params.allow_level_zero_search:
            return True
        if start <= 2:
            return False
        return level == start - 1

    def _lose(self, reason: str) -> None:
        self.state = SearchState.LOST
        self.reason = reason
        logger.debug("search: lost at level %d (%s)", self.level, reason)

    def _search_blind(self, scene: np.ndarray, template: np.ndarray) -> None:
        if not self.should_search_blind(self.level):
            self._lose("refused")
            return
        cand = best_match(scene, template, self.params.method, self.level)
        self.candidate = cand
        self.last_score = cand.score
        self.state = SearchState.TRACKING

    def _track(self, scene: np.ndarray, template: np.ndarray) -> None:
        if self.candidate is None:
            raise RuntimeError("refinement started without a candidate")
        region = plan_roi(self.candidate.point, scene.shape, template.shape)
        local = best_match(region.crop(scene), template, self.params.method, self.level)
        self.last_score = local.score
        if local.score < self.params.weak_threshold:
            self._lose("track_lost")
            return
        point = local.point.offset(region.x, region.y)
        self.candidate = MatchCandidate(point, local.score, self.level)
        if local.score >= self.params.strict_threshold:
            self.candidate = MatchCandidate(to_full_resolution(point, self.level), local.score, 0)
            self.state = SearchState.ESCALATED
            logger.debug("search: escalated at level %d score=%.4f", self.level, local.score)

    def step(self) -> SearchState:
        """Process the current level and advance to the next one."""
        if self.state.terminal:
            return self.state
        scene = image_at_level(self.scene, self.level)
        template = image_at_level(self.template, self.level)
        try:
            if self.state is SearchState.SEARCHING:
                self._search_blind(scene, template)
            else:
                self._track(scene, template)
        except InvalidGeometryError as e:
            logger.warning("search: %s at level %d", e, self.level)
            self._lose("invalid_geometry")
        self.timer.add_split(f"level:{self.level} point:{self.candidate.point if self.candidate else None}")
        if not self.state.terminal:
            if self.level == 0:
                self.state = SearchState.EXHAUSTED
            else:
                self.level -= 1
        return self.state

    def result(self) -> MatchResult:
        if self.state is SearchState.LOST or self.candidate is None:
            return MatchResult(SearchState.LOST, None, self.last_score, self.level, self.reason or "refused")
        if self.candidate.score < self.params.strict_threshold:
            return MatchResult(self.state, None, self.candidate.score, self.level, "below_strict")
        return MatchResult(self.state, self.candidate.point, self.candidate.score, self.level)

    def run(self) -> MatchResult:
        while not self.state.terminal:
            self.step()
        res = self.result()
        self.timer.add_split(f"result:{res.point}")
        self.timer.dump()
        logger.debug(
            "search: %s state=%s score=%.4f start_level=%d reason=%s",
            "found" if res.found else "not found", res.state.value, res.score, self.start_level, res.reason,
        )
        return res


def fast_template_matching(
    scene: np.ndarray,
    template: np.ndarray,
    params: Optional[SearchParams] = None,
    **overrides,
) -> MatchResult:
    """Locate `template` in `scene`; returns the top-left corner at full resolution.

    Keyword overrides replace fields of `params` (or of the defaults), e.g.
    fast_template_matching(img, tpl, method="sqdiff_normed", weak_threshold=-0.1).
    """
    params = params or SearchParams()
    if overrides:
        params = replace(params, **overrides)
    return SearchController(scene, template, params).run()


def find_template(scene: np.ndarray, template: np.ndarray, threshold: float = DEFAULT_STRICT_THRESHOLD) -> MatchResult:
    """Short form: default method, weak threshold 0.75, automatic level."""
    return fast_template_matching(scene, template, SearchParams(strict_threshold=threshold))
