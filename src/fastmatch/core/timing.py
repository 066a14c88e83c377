"""Split timer for per-call diagnostics.

Collects named checkpoints with time.perf_counter and writes them to a
logger at DEBUG in one block when dump() is called. When neither
FM_MATCH_PERF nor DEBUG logging is on, add_split/dump only cost a flag check.

Usage:
    timer = SplitTimer("fast_tm", logger)
    timer.add_split("select_level:3")
    ...
    timer.dump()
"""
from __future__ import annotations

import logging
import time
from typing import List, Optional, Tuple

from ..config.matching import PERF_ENABLED


class SplitTimer:
    def __init__(self, label: str, logger: Optional[logging.Logger] = None, enabled: Optional[bool] = None) -> None:
        self.label = label
        self.logger = logger or logging.getLogger(__name__)
        if enabled is None:
            enabled = PERF_ENABLED or self.logger.isEnabledFor(logging.DEBUG)
        self.enabled = bool(enabled)
        self.splits: List[Tuple[str, float]] = []
        self._t0 = time.perf_counter()
        self._last = self._t0

    def add_split(self, name: str) -> None:
        if not self.enabled:
            return
        now = time.perf_counter()
        self.splits.append((name, (now - self._last) * 1000.0))
        self._last = now

    @property
    def total_ms(self) -> float:
        return (self._last - self._t0) * 1000.0

    def dump(self) -> None:
        """Write all splits, then reset so the timer can be reused."""
        if not self.enabled:
            return
        # perf logging must never break a match call
        try:
            self.logger.debug("%s: begin", self.label)
            for name, ms in self.splits:
                self.logger.debug("%s:      %.2f ms, %s", self.label, ms, name)
            self.logger.debug("%s: end, %.2f ms", self.label, self.total_ms)
        except Exception:
            pass
        self.splits = []
        self._t0 = self._last = time.perf_counter()
