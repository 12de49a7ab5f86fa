"""Pointer event model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

POINTER_DOWN = "pointer_down"
POINTER_MOVE = "pointer_move"
POINTER_UP = "pointer_up"
POINTER_EVENT_TYPES: frozenset[str] = frozenset({POINTER_DOWN, POINTER_MOVE, POINTER_UP})

PRIMARY_BUTTON = 1


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """Pointer event in canvas-local coordinates."""

    event_type: str
    x: float
    y: float
    button: int = PRIMARY_BUTTON


def pointer_event_from_dict(event: dict[str, Any]) -> PointerEvent | None:
    """Normalize a rendercanvas-style event dict; ``None`` when malformed."""
    event_type = event.get("event_type")
    if event_type not in POINTER_EVENT_TYPES:
        return None
    x = event.get("x")
    y = event.get("y")
    if not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
        return None
    button = event.get("button")
    if not isinstance(button, int):
        button = 0
    return PointerEvent(str(event_type), float(x), float(y), button)
