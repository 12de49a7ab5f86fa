"""Renderer-facing canvas view state."""

from __future__ import annotations

from dataclasses import dataclass

from pillsplitter.app.interaction import GestureMode
from pillsplitter.core.geometry import Rect
from pillsplitter.core.models import Shape


@dataclass(frozen=True, slots=True)
class CanvasUIState:
    """Everything a renderer needs to draw one frame."""

    shapes: tuple[Shape, ...]
    preview: Rect | None
    cursor_x: float
    cursor_y: float
    mode: GestureMode
    revision: int
