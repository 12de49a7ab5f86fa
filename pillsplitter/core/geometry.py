"""Canvas geometry primitives and predicates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Rect:
    """Simple axis-aligned rectangle."""

    x: float
    y: float
    w: float
    h: float

    def contains(self, px: float, py: float) -> bool:
        """Return whether a point is inside the rectangle (edges included)."""
        return in_closed_span(px, self.x, self.w) and in_closed_span(py, self.y, self.h)


def in_closed_span(value: float, start: float, length: float) -> bool:
    """Return whether ``start <= value <= start + length``."""
    return start <= value <= start + length


def in_open_span(value: float, start: float, length: float) -> bool:
    """Return whether ``start < value < start + length``; edges never count."""
    return start < value < start + length


def crosses(x: float, y: float, w: float, h: float, px: float, py: float) -> bool:
    """Return whether crosshair lines through (px, py) cut the rectangle on either axis."""
    return in_open_span(px, x, w) or in_open_span(py, y, h)


def span_rect(x0: float, y0: float, x1: float, y1: float) -> Rect:
    """Build the axis-aligned box spanning two corner points in any order."""
    return Rect(x=min(x0, x1), y=min(y0, y1), w=abs(x1 - x0), h=abs(y1 - y0))
