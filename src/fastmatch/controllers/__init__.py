"""Controllers: IO-bound front-ends (screen capture) over the pure search."""
from .screen import ScreenMatcher

__all__ = ["ScreenMatcher"]
