"""Crosshair split of shapes into up to four pieces.

A shape cut by the crosshair is divided along every axis where both
resulting pieces are at least ``min_size_to_split`` long. On an axis where
the crosshair cuts the shape but a split would leave a sliver, the shape (or
its pieces) is instead shifted off the crosshair line so that it sits wholly
on the side its center is on, ``adjust_gap`` away from the line.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from pillsplitter.core.geometry import in_open_span
from pillsplitter.core.ids import IdSource
from pillsplitter.core.models import Shape


@dataclass(frozen=True, slots=True)
class SplitPolicy:
    """Thresholds controlling when an axis is divided or shifted."""

    min_size_to_split: float
    adjust_gap: float


@dataclass(frozen=True, slots=True)
class AxisCut:
    """How the crosshair meets a shape on both axes."""

    left_w: float
    right_w: float
    top_h: float
    bottom_h: float
    v_hit: bool
    h_hit: bool
    can_split_v: bool
    can_split_h: bool


def measure_cut(shape: Shape, cx: float, cy: float, min_size: float) -> AxisCut:
    """Compute piece sizes and hit/split flags for a crosshair at (cx, cy)."""
    left_w = cx - shape.x
    right_w = shape.x + shape.w - cx
    top_h = cy - shape.y
    bottom_h = shape.y + shape.h - cy
    v_hit = in_open_span(cx, shape.x, shape.w)
    h_hit = in_open_span(cy, shape.y, shape.h)
    return AxisCut(
        left_w=left_w,
        right_w=right_w,
        top_h=top_h,
        bottom_h=bottom_h,
        v_hit=v_hit,
        h_hit=h_hit,
        can_split_v=v_hit and left_w >= min_size and right_w >= min_size,
        can_split_h=h_hit and top_h >= min_size and bottom_h >= min_size,
    )


def adjusted_x(shape: Shape, cx: float, gap: float) -> float:
    """Horizontal position that clears the vertical crosshair line."""
    return cx - shape.w - gap if shape.center_x < cx else cx + gap


def adjusted_y(shape: Shape, cy: float, gap: float) -> float:
    """Vertical position that clears the horizontal crosshair line."""
    return cy - shape.h - gap if shape.center_y < cy else cy + gap


def split_shape(
    shape: Shape,
    cx: float,
    cy: float,
    *,
    policy: SplitPolicy,
    next_id: IdSource,
) -> tuple[Shape, ...]:
    """Return the shapes that replace ``shape`` after a crosshair tap."""
    cut = measure_cut(shape, cx, cy, policy.min_size_to_split)
    x, y, w, h, color = shape.x, shape.y, shape.w, shape.h, shape.color

    if cut.can_split_v and cut.can_split_h:
        return (
            Shape(next_id(), x, y, cut.left_w, cut.top_h, color),
            Shape(next_id(), cx, y, cut.right_w, cut.top_h, color),
            Shape(next_id(), x, cy, cut.left_w, cut.bottom_h, color),
            Shape(next_id(), cx, cy, cut.right_w, cut.bottom_h, color),
        )
    if cut.can_split_h:
        pieces = (
            Shape(next_id(), x, y, w, cut.top_h, color),
            Shape(next_id(), x, cy, w, cut.bottom_h, color),
        )
        if cut.v_hit:
            return tuple(piece.moved_to(adjusted_x(piece, cx, policy.adjust_gap), piece.y) for piece in pieces)
        return pieces
    if cut.can_split_v:
        pieces = (
            Shape(next_id(), x, y, cut.left_w, h, color),
            Shape(next_id(), cx, y, cut.right_w, h, color),
        )
        if cut.h_hit:
            return tuple(piece.moved_to(piece.x, adjusted_y(piece, cy, policy.adjust_gap)) for piece in pieces)
        return pieces
    if not (cut.v_hit or cut.h_hit):
        return (shape,)
    new_x = adjusted_x(shape, cx, policy.adjust_gap) if cut.v_hit else x
    new_y = adjusted_y(shape, cy, policy.adjust_gap) if cut.h_hit else y
    return (shape.moved_to(new_x, new_y),)


def plan_split(
    shapes: Sequence[Shape],
    cx: float,
    cy: float,
    target_ids: Collection[str],
    *,
    policy: SplitPolicy,
    next_id: IdSource,
) -> dict[str, tuple[Shape, ...]]:
    """Map each targeted shape id to its replacement shapes, in store order."""
    return {
        shape.id: split_shape(shape, cx, cy, policy=policy, next_id=next_id)
        for shape in shapes
        if shape.id in target_ids
    }
