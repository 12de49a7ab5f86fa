"""Shape model, store, hit testing and split engine."""

from pillsplitter.core.geometry import Rect, crosses, in_closed_span, in_open_span, span_rect
from pillsplitter.core.hit_test import crossed_ids, is_crossed, topmost_body_hit
from pillsplitter.core.ids import IdSource, SequentialIds, uuid_ids
from pillsplitter.core.models import DEFAULT_PALETTE, Shape
from pillsplitter.core.shape_store import ShapeSnapshot, ShapeStore
from pillsplitter.core.split_engine import SplitPolicy, plan_split, split_shape

__all__ = [
    "DEFAULT_PALETTE",
    "IdSource",
    "Rect",
    "SequentialIds",
    "Shape",
    "ShapeSnapshot",
    "ShapeStore",
    "SplitPolicy",
    "crossed_ids",
    "crosses",
    "in_closed_span",
    "in_open_span",
    "is_crossed",
    "plan_split",
    "span_rect",
    "split_shape",
    "topmost_body_hit",
    "uuid_ids",
]
