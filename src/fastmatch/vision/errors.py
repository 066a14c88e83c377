"""Exceptions raised by the matching pipeline.

Failure to find a template is never an exception; it is reported through
MatchResult. These types cover broken inputs only.
"""
from __future__ import annotations


class MatchError(Exception):
    """Base class for matching errors."""


class InvalidGeometryError(MatchError):
    """Scene (or search region) cannot hold the template."""

    def __init__(self, scene_shape, template_shape, message=None) -> None:
        self.scene_shape = tuple(scene_shape)
        self.template_shape = tuple(template_shape)
        super().__init__(
            message or f"template {self.template_shape} does not fit in search area {self.scene_shape}"
        )


class TemplateLoadError(MatchError, FileNotFoundError):
    """Image file missing or unreadable by OpenCV."""
