"""Canvas controller: pointer gestures to shape store mutations."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from typing import Any, Protocol

from pillsplitter.app.events import (
    POINTER_DOWN,
    POINTER_MOVE,
    POINTER_UP,
    PRIMARY_BUTTON,
    PointerEvent,
    pointer_event_from_dict,
)
from pillsplitter.app.interaction import (
    DraggingState,
    DrawingState,
    GestureMode,
    GestureState,
    PressMemory,
    mode_of,
    preview_of,
)
from pillsplitter.app.ui_state import CanvasUIState
from pillsplitter.core.geometry import span_rect
from pillsplitter.core.hit_test import crossed_ids, topmost_body_hit
from pillsplitter.core.ids import IdSource, uuid_ids
from pillsplitter.core.models import Shape
from pillsplitter.core.shape_store import ShapeStore
from pillsplitter.core.split_engine import SplitPolicy, plan_split
from pillsplitter.infra.config import SplitterConfig

EventHandler = Callable[[dict[str, Any]], None]

logger = logging.getLogger(__name__)


class PointerEventSource(Protocol):
    """Anything that dispatches rendercanvas-style pointer event dicts."""

    def add_event_handler(self, handler: EventHandler, *types: str) -> None: ...

    def remove_event_handler(self, handler: EventHandler, *types: str) -> None: ...


class CanvasController:
    """Owns the shape store and the draw/drag/tap gesture state machine.

    A press on a shape starts a drag, a press on empty canvas starts a draw.
    Any release that stays within the tap distance and time thresholds of its
    press additionally splits every shape crossed by the release point,
    regardless of which gesture the press started.
    """

    def __init__(
        self,
        config: SplitterConfig | None = None,
        *,
        store: ShapeStore | None = None,
        id_source: IdSource | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._config = config or SplitterConfig()
        self._store = store if store is not None else ShapeStore()
        self._next_id = id_source or uuid_ids
        self._rng = rng or random.Random()
        self._clock = clock or time.monotonic
        self._split_policy = SplitPolicy(
            min_size_to_split=self._config.min_size_to_split,
            adjust_gap=self._config.adjust_gap,
        )
        self._gesture: GestureState = None
        self._press: PressMemory | None = None
        self._cursor_x, self._cursor_y = self._config.initial_cursor
        self._canvas: PointerEventSource | None = None
        self._capture: PointerEventSource | None = None
        self._capturing = False

    @property
    def store(self) -> ShapeStore:
        return self._store

    @property
    def config(self) -> SplitterConfig:
        return self._config

    @property
    def gesture(self) -> GestureState:
        return self._gesture

    @property
    def press_memory(self) -> PressMemory | None:
        return self._press

    @property
    def is_capturing(self) -> bool:
        return self._capturing

    def mode(self) -> GestureMode:
        return mode_of(self._gesture)

    def ui_state(self) -> CanvasUIState:
        """Build the renderer view for the current frame."""
        snapshot = self._store.snapshot()
        return CanvasUIState(
            shapes=snapshot.shapes,
            preview=preview_of(self._gesture),
            cursor_x=self._cursor_x,
            cursor_y=self._cursor_y,
            mode=self.mode(),
            revision=snapshot.revision,
        )

    def bind(self, canvas: PointerEventSource, capture: PointerEventSource | None = None) -> None:
        """Listen for presses on ``canvas``; capture move/up on ``capture`` during gestures.

        ``capture`` defaults to ``canvas``. It should deliver events even when
        the pointer leaves the canvas, in canvas-local coordinates.
        """
        if self._canvas is not None:
            raise RuntimeError("Controller is already bound to a canvas.")
        self._canvas = canvas
        self._capture = capture or canvas
        canvas.add_event_handler(self._on_pointer_down, POINTER_DOWN)
        canvas.add_event_handler(self._on_hover, POINTER_MOVE)

    def unbind(self) -> None:
        """Drop every event subscription held by the controller."""
        self._end_capture()
        if self._canvas is not None:
            self._canvas.remove_event_handler(self._on_pointer_down, POINTER_DOWN)
            self._canvas.remove_event_handler(self._on_hover, POINTER_MOVE)
        self._canvas = None
        self._capture = None

    def handle_event(self, event: PointerEvent) -> bool:
        """Dispatch one normalized pointer event."""
        if event.event_type == POINTER_DOWN:
            return self.handle_pointer_down(event.x, event.y, event.button)
        if event.event_type == POINTER_MOVE:
            return self.handle_pointer_move(event.x, event.y)
        if event.event_type == POINTER_UP:
            return self.handle_pointer_up(event.x, event.y)
        return False

    def handle_pointer_down(self, x: float, y: float, button: int = PRIMARY_BUTTON) -> bool:
        """Start a drag on the topmost shape under the pointer, or a new draw."""
        if button != PRIMARY_BUTTON or self._gesture is not None:
            return False
        hit_id = topmost_body_hit(self._store.shapes(), x, y)
        self._press = PressMemory(x=x, y=y, timestamp=self._clock(), hit_id=hit_id)
        target = None if hit_id is None else self._store.get(hit_id)
        if target is not None:
            self._store.move_to_top(target.id)
            self._gesture = DraggingState(target_id=target.id, offset_x=x - target.x, offset_y=y - target.y)
            logger.debug("gesture_drag_start id=%s offset=(%.1f,%.1f)", target.id, x - target.x, y - target.y)
        else:
            self._gesture = DrawingState(start_x=x, start_y=y, current_x=x, current_y=y)
            logger.debug("gesture_draw_start x=%.1f y=%.1f", x, y)
        self._begin_capture()
        return True

    def handle_pointer_move(self, x: float, y: float) -> bool:
        """Track the cursor and advance the active gesture."""
        self._cursor_x = x
        self._cursor_y = y
        gesture = self._gesture
        if isinstance(gesture, DrawingState):
            self._gesture = gesture.tracking(x, y)
        elif isinstance(gesture, DraggingState):
            self._store.set_position(gesture.target_id, x - gesture.offset_x, y - gesture.offset_y)
        return True

    def handle_pointer_up(self, x: float, y: float) -> bool:
        """Finish the active gesture, then split crossed shapes if this was a tap."""
        gesture = self._gesture
        tap = self._press is not None and self._press.is_tap(
            x,
            y,
            self._clock(),
            distance_threshold=self._config.tap_distance_threshold,
            time_threshold_ms=self._config.tap_time_threshold_ms,
        )
        # Targets come from the shapes present before this release commits a draw.
        targets = crossed_ids(self._store.shapes(), x, y) if tap else frozenset()

        self._gesture = None
        self._end_capture()
        changed = gesture is not None
        if isinstance(gesture, DrawingState):
            self._commit_draw(gesture, x, y)
        elif isinstance(gesture, DraggingState):
            logger.debug("gesture_drag_end id=%s tap=%s", gesture.target_id, tap)

        if targets:
            self._split_at(x, y, targets)
            changed = True
        return changed

    def _commit_draw(self, gesture: DrawingState, x: float, y: float) -> Shape | None:
        box = span_rect(gesture.start_x, gesture.start_y, x, y)
        minimum = self._config.min_size_to_draw
        if box.w < minimum or box.h < minimum:
            logger.debug("gesture_draw_discarded w=%.1f h=%.1f min=%.1f", box.w, box.h, minimum)
            return None
        shape = Shape(
            id=self._next_id(),
            x=box.x,
            y=box.y,
            w=box.w,
            h=box.h,
            color=self._rng.choice(self._config.palette),
        )
        self._store.add(shape)
        logger.info(
            "shape_drawn id=%s x=%.1f y=%.1f w=%.1f h=%.1f color=%s",
            shape.id,
            shape.x,
            shape.y,
            shape.w,
            shape.h,
            shape.color,
        )
        return shape

    def _split_at(self, x: float, y: float, targets: frozenset[str]) -> None:
        plan = plan_split(
            self._store.shapes(),
            x,
            y,
            targets,
            policy=self._split_policy,
            next_id=self._next_id,
        )
        self._store.replace(targets, plan)
        logger.info(
            "shapes_split x=%.1f y=%.1f targets=%d pieces=%d",
            x,
            y,
            len(plan),
            sum(len(pieces) for pieces in plan.values()),
        )

    def _begin_capture(self) -> None:
        if self._capture is None or self._capturing:
            return
        self._capture.add_event_handler(self._on_captured_move, POINTER_MOVE)
        self._capture.add_event_handler(self._on_captured_up, POINTER_UP)
        self._capturing = True

    def _end_capture(self) -> None:
        if self._capture is None or not self._capturing:
            return
        self._capture.remove_event_handler(self._on_captured_move, POINTER_MOVE)
        self._capture.remove_event_handler(self._on_captured_up, POINTER_UP)
        self._capturing = False

    def _on_pointer_down(self, event: dict[str, Any]) -> None:
        pointer = pointer_event_from_dict(event)
        if pointer is None or pointer.event_type != POINTER_DOWN:
            return
        self.handle_pointer_down(pointer.x, pointer.y, pointer.button)

    def _on_hover(self, event: dict[str, Any]) -> None:
        if self._capturing:
            return
        pointer = pointer_event_from_dict(event)
        if pointer is None or pointer.event_type != POINTER_MOVE:
            return
        self.handle_pointer_move(pointer.x, pointer.y)

    def _on_captured_move(self, event: dict[str, Any]) -> None:
        pointer = pointer_event_from_dict(event)
        if pointer is None or pointer.event_type != POINTER_MOVE:
            return
        self.handle_pointer_move(pointer.x, pointer.y)

    def _on_captured_up(self, event: dict[str, Any]) -> None:
        pointer = pointer_event_from_dict(event)
        if pointer is None or pointer.event_type != POINTER_UP:
            return
        if pointer.button != PRIMARY_BUTTON:
            return
        self.handle_pointer_up(pointer.x, pointer.y)
