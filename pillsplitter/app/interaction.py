"""Transient gesture state for the canvas controller."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

from pillsplitter.core.geometry import Rect, span_rect


class GestureMode(StrEnum):
    """Which gesture, if any, is in progress."""

    IDLE = "IDLE"
    DRAWING = "DRAWING"
    DRAGGING = "DRAGGING"


@dataclass(frozen=True, slots=True)
class DrawingState:
    """New-shape gesture anchored at the press point."""

    start_x: float
    start_y: float
    current_x: float
    current_y: float

    def tracking(self, x: float, y: float) -> DrawingState:
        return DrawingState(self.start_x, self.start_y, x, y)


@dataclass(frozen=True, slots=True)
class DraggingState:
    """Shape drag with the grab offset from the shape's top-left corner."""

    target_id: str
    offset_x: float
    offset_y: float


@dataclass(frozen=True, slots=True)
class PressMemory:
    """Pointer-down details consulted at release for tap classification."""

    x: float
    y: float
    timestamp: float
    hit_id: str | None = None

    def is_tap(
        self,
        x: float,
        y: float,
        now: float,
        *,
        distance_threshold: float,
        time_threshold_ms: float,
    ) -> bool:
        """Return whether a release at (x, y) at ``now`` seconds forms a tap."""
        distance = math.hypot(x - self.x, y - self.y)
        elapsed_ms = (now - self.timestamp) * 1000.0
        return distance < distance_threshold and elapsed_ms < time_threshold_ms


GestureState = DrawingState | DraggingState | None


def mode_of(state: GestureState) -> GestureMode:
    if isinstance(state, DrawingState):
        return GestureMode.DRAWING
    if isinstance(state, DraggingState):
        return GestureMode.DRAGGING
    return GestureMode.IDLE


def preview_of(state: GestureState) -> Rect | None:
    """Box spanning the drawing start and the live pointer, if drawing."""
    if not isinstance(state, DrawingState):
        return None
    return span_rect(state.start_x, state.start_y, state.current_x, state.current_y)
