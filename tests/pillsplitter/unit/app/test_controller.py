"""Controller gesture and state machine tests."""

from __future__ import annotations

import random

from pillsplitter.app.controller import CanvasController
from pillsplitter.app.events import PointerEvent
from pillsplitter.app.interaction import DraggingState, DrawingState, GestureMode
from pillsplitter.core.geometry import Rect
from pillsplitter.core.ids import SequentialIds
from pillsplitter.core.models import Shape
from pillsplitter.core.shape_store import ShapeStore
from pillsplitter.infra.config import SplitterConfig


def _controller(config, clock, ids, rng=None, shapes=()) -> CanvasController:
    return CanvasController(
        config,
        store=ShapeStore(shapes),
        id_source=ids,
        rng=rng or random.Random(7),
        clock=clock,
    )


def _drag(controller: CanvasController, clock, start, end, *, hold_ms: float = 500) -> None:
    controller.handle_pointer_down(*start)
    controller.handle_pointer_move(*end)
    clock.advance_ms(hold_ms)
    controller.handle_pointer_up(*end)


def _tap(controller: CanvasController, clock, point) -> bool:
    controller.handle_pointer_down(*point)
    clock.advance_ms(50)
    return controller.handle_pointer_up(*point)


def test_draw_gesture_adds_shape(config, clock, ids) -> None:
    controller = _controller(config, clock, ids)

    _drag(controller, clock, (10, 10), (110, 110))

    (shape,) = controller.store.shapes()
    assert (shape.id, shape.x, shape.y, shape.w, shape.h) == ("shape-1", 10, 10, 100, 100)
    assert shape.color in config.palette
    assert controller.mode() is GestureMode.IDLE


def test_draw_in_reverse_direction_normalizes_box(config, clock, ids) -> None:
    controller = _controller(config, clock, ids)
    _drag(controller, clock, (110, 110), (10, 60))
    (shape,) = controller.store.shapes()
    assert (shape.x, shape.y, shape.w, shape.h) == (10, 60, 100, 50)


def test_draw_below_minimum_is_discarded(config, clock, ids) -> None:
    controller = _controller(config, clock, ids)

    _drag(controller, clock, (10, 10), (110, 29))
    _drag(controller, clock, (10, 10), (29, 110))

    assert controller.store.shapes() == ()
    assert controller.gesture is None


def test_draw_exactly_minimum_is_kept(config, clock, ids) -> None:
    controller = _controller(config, clock, ids)
    _drag(controller, clock, (10, 10), (30, 30))
    assert len(controller.store) == 1


def test_preview_tracks_drawing(config, clock, ids) -> None:
    controller = _controller(config, clock, ids)
    controller.handle_pointer_down(50, 50)
    controller.handle_pointer_move(20, 80)

    ui = controller.ui_state()
    assert controller.gesture == DrawingState(50, 50, 20, 80)
    assert ui.mode is GestureMode.DRAWING
    assert ui.preview == Rect(20, 50, 30, 30)
    assert (ui.cursor_x, ui.cursor_y) == (20, 80)

    controller.handle_pointer_up(20, 80)
    assert controller.ui_state().preview is None


def test_initial_cursor_comes_from_config(clock, ids) -> None:
    controller = _controller(SplitterConfig(initial_cursor=(5.0, 6.0)), clock, ids)
    ui = controller.ui_state()
    assert (ui.cursor_x, ui.cursor_y) == (5.0, 6.0)
    assert ui.mode is GestureMode.IDLE


def test_tap_splits_shape_into_four(config, clock, ids) -> None:
    controller = _controller(config, clock, ids, shapes=[Shape("p", 10, 10, 100, 100, "#abc")])

    assert _tap(controller, clock, (60, 60)) is True

    shapes = controller.store.shapes()
    assert [(s.x, s.y, s.w, s.h) for s in shapes] == [
        (10, 10, 50, 50),
        (60, 10, 50, 50),
        (10, 60, 50, 50),
        (60, 60, 50, 50),
    ]
    assert "p" not in controller.store
    assert all(s.color == "#abc" for s in shapes)


def test_tap_on_empty_space_leaves_store_unchanged(config, clock, ids) -> None:
    controller = _controller(config, clock, ids, shapes=[Shape("p", 10, 10, 100, 100, "#abc")])
    before = controller.store.shapes()

    _tap(controller, clock, (300, 300))

    assert controller.store.shapes() == before


def test_tap_started_off_shape_still_splits_crossed_shape(config, clock, ids) -> None:
    controller = _controller(config, clock, ids, shapes=[Shape("p", 10, 10, 100, 100, "#abc")])

    # Below the body, inside its horizontal span: a draw starts, then the tap splits.
    _tap(controller, clock, (60, 300))

    assert [(s.x, s.y, s.w, s.h) for s in controller.store.shapes()] == [(10, 10, 50, 100), (60, 10, 50, 100)]


def test_slow_release_is_not_a_tap(config, clock, ids) -> None:
    controller = _controller(config, clock, ids, shapes=[Shape("p", 10, 10, 100, 100, "#abc")])
    controller.handle_pointer_down(60, 60)
    clock.advance_ms(300)
    controller.handle_pointer_up(60, 60)
    assert controller.store.ids() == ("p",)


def test_small_wobble_still_counts_as_tap(config, clock, ids) -> None:
    controller = _controller(config, clock, ids, shapes=[Shape("p", 10, 10, 100, 100, "#abc")])
    controller.handle_pointer_down(60, 60)
    controller.handle_pointer_move(62, 62)
    clock.advance_ms(100)
    controller.handle_pointer_up(62, 62)
    # The wobble dragged the shape by (2, 2) before the split at (62, 62).
    assert [(s.x, s.y, s.w, s.h) for s in controller.store.shapes()] == [
        (12, 12, 50, 50),
        (62, 12, 50, 50),
        (12, 62, 50, 50),
        (62, 62, 50, 50),
    ]


def test_tap_splits_every_crossed_shape(config, clock, ids) -> None:
    shapes = [
        Shape("a", 10, 10, 100, 100, "#1"),
        Shape("b", 200, 10, 100, 100, "#2"),
        Shape("far", 500, 500, 50, 50, "#3"),
    ]
    controller = _controller(config, clock, ids, shapes=shapes)

    _tap(controller, clock, (150, 60))

    assert controller.store.ids() == ("shape-1", "shape-2", "shape-3", "shape-4", "far")
    top_a, bottom_a = controller.store.shapes()[:2]
    assert (top_a.x, top_a.y, top_a.w, top_a.h) == (10, 10, 100, 50)
    assert (bottom_a.x, bottom_a.y, bottom_a.w, bottom_a.h) == (10, 60, 100, 50)


def test_press_on_shape_moves_it_to_top_and_drags(config, clock, ids) -> None:
    shapes = [Shape("a", 10, 10, 100, 100, "#1"), Shape("b", 400, 400, 10, 10, "#2")]
    controller = _controller(config, clock, ids, shapes=shapes)

    controller.handle_pointer_down(55, 55)
    assert controller.store.ids() == ("b", "a")
    assert controller.gesture == DraggingState("a", 45, 45)
    assert controller.press_memory is not None and controller.press_memory.hit_id == "a"

    controller.handle_pointer_move(200, 200)
    assert controller.store.get("a") == Shape("a", 155, 155, 100, 100, "#1")

    clock.advance_ms(50)
    controller.handle_pointer_up(200, 200)
    assert controller.gesture is None
    assert controller.store.ids() == ("b", "a")
    assert controller.store.get("a") == Shape("a", 155, 155, 100, 100, "#1")
    assert controller.store.get("b") == Shape("b", 400, 400, 10, 10, "#2")


def test_press_on_overlap_picks_topmost(config, clock, ids) -> None:
    shapes = [Shape("low", 0, 0, 100, 100, "#1"), Shape("high", 50, 50, 100, 100, "#2")]
    controller = _controller(config, clock, ids, shapes=shapes)
    controller.handle_pointer_down(75, 75)
    assert controller.gesture == DraggingState("high", 25, 25)


def test_drag_isolation(config, clock, ids) -> None:
    shapes = [Shape(f"s{i}", i * 120, 0, 100, 100, "#1") for i in range(4)]
    controller = _controller(config, clock, ids, shapes=shapes)
    others = {s.id: s for s in shapes if s.id != "s2"}

    _drag(controller, clock, (250, 50), (30, 400))

    for shape in controller.store.shapes():
        if shape.id != "s2":
            assert shape == others[shape.id]


def test_secondary_button_does_not_start_gesture(config, clock, ids) -> None:
    controller = _controller(config, clock, ids)
    assert controller.handle_pointer_down(10, 10, button=2) is False
    assert controller.gesture is None
    assert controller.press_memory is None


def test_second_press_during_gesture_is_ignored(config, clock, ids) -> None:
    controller = _controller(config, clock, ids)
    controller.handle_pointer_down(10, 10)
    assert controller.handle_pointer_down(300, 300) is False
    assert controller.gesture == DrawingState(10, 10, 10, 10)


def test_release_without_press_is_noop(config, clock, ids) -> None:
    controller = _controller(config, clock, ids, shapes=[Shape("p", 10, 10, 100, 100, "#abc")])
    assert controller.handle_pointer_up(60, 60) is False
    assert controller.store.ids() == ("p",)


def test_idle_release_tap_runs_split_check(config, clock, ids) -> None:
    controller = _controller(config, clock, ids)
    _tap(controller, clock, (300, 300))
    assert controller.gesture is None
    controller.store.add(Shape("p", 250, 250, 100, 100, "#abc"))

    # A second release while idle is classified against the last press.
    assert controller.handle_pointer_up(301, 300) is True
    assert [(s.x, s.y, s.w, s.h) for s in controller.store.shapes()] == [
        (250, 250, 51, 50),
        (301, 250, 49, 50),
        (250, 300, 51, 50),
        (301, 300, 49, 50),
    ]


def test_new_draw_is_never_split_by_its_own_release(clock, ids) -> None:
    config = SplitterConfig(min_size_to_draw=1, min_size_to_split=1, tap_distance_threshold=10)
    controller = _controller(config, clock, ids)
    controller.handle_pointer_down(10, 10)
    clock.advance_ms(20)
    controller.handle_pointer_up(15, 15)
    (shape,) = controller.store.shapes()
    assert (shape.x, shape.y, shape.w, shape.h) == (10, 10, 5, 5)


def test_tap_that_completes_draw_also_splits_other_shape(clock, ids) -> None:
    config = SplitterConfig(min_size_to_draw=2, min_size_to_split=30, tap_distance_threshold=10)
    controller = _controller(config, clock, ids, shapes=[Shape("p", 10, 10, 100, 100, "#abc")])

    controller.handle_pointer_down(57, 300)
    clock.advance_ms(20)
    controller.handle_pointer_up(60, 303)

    assert controller.store.ids() == ("shape-2", "shape-3", "shape-1")
    drawn = controller.store.get("shape-1")
    assert drawn is not None
    assert (drawn.x, drawn.y, drawn.w, drawn.h) == (57, 300, 3, 3)


def test_ids_stay_unique_across_draws_and_splits(config, clock) -> None:
    controller = _controller(config, clock, SequentialIds())
    _drag(controller, clock, (10, 10), (210, 210))
    _drag(controller, clock, (300, 10), (500, 210))
    _tap(controller, clock, (110, 110))
    _tap(controller, clock, (60, 60))
    _tap(controller, clock, (400, 150))

    ids = controller.store.ids()
    assert len(ids) == len(set(ids))
    assert len(ids) > 2


def test_palette_choice_uses_injected_rng(config, clock) -> None:
    first = _controller(config, clock, SequentialIds(), rng=random.Random(3))
    second = _controller(config, clock, SequentialIds(), rng=random.Random(3))
    for controller in (first, second):
        _drag(controller, clock, (10, 10), (60, 60))
        _drag(controller, clock, (100, 100), (160, 160))
    assert [s.color for s in first.store.shapes()] == [s.color for s in second.store.shapes()]


def test_handle_event_dispatches_normalized_events(config, clock, ids) -> None:
    controller = _controller(config, clock, ids)
    controller.handle_event(PointerEvent("pointer_down", 10, 10))
    controller.handle_event(PointerEvent("pointer_move", 110, 110, 0))
    clock.advance_ms(400)
    controller.handle_event(PointerEvent("pointer_up", 110, 110))
    assert len(controller.store) == 1
    assert controller.handle_event(PointerEvent("wheel", 0, 0)) is False
