# mapview/errors.py
from __future__ import annotations


class VisibilityError(Exception):
    """Base class for errors raised by the visibility engine."""


class InvalidRadius(VisibilityError, ValueError):
    """A negative radius was requested."""

    def __init__(self, radius: float) -> None:
        super().__init__(f"radius must be >= 0, got {radius!r}")
        self.radius = radius


class InvalidCoordinate(VisibilityError, ValueError):
    """A coordinate failed shape validation for the map's variant."""
