"""Ordered, revisioned shape store."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass

from pillsplitter.core.models import Shape


@dataclass(frozen=True, slots=True)
class ShapeSnapshot:
    """Immutable view of store contents at one revision."""

    shapes: tuple[Shape, ...]
    revision: int


class ShapeStore:
    """Shapes in z-order, bottom first; the last shape is topmost.

    Operations referencing an unknown id leave the store untouched and do not
    bump the revision.
    """

    def __init__(self, shapes: Iterable[Shape] = ()) -> None:
        self._shapes: list[Shape] = []
        self._revision = 0
        for shape in shapes:
            self._append(shape)

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(tuple(self._shapes))

    def __contains__(self, shape_id: object) -> bool:
        return self._index_of(shape_id) is not None

    def shapes(self) -> tuple[Shape, ...]:
        return tuple(self._shapes)

    def ids(self) -> tuple[str, ...]:
        return tuple(shape.id for shape in self._shapes)

    def get(self, shape_id: str) -> Shape | None:
        index = self._index_of(shape_id)
        return None if index is None else self._shapes[index]

    def revision(self) -> int:
        return self._revision

    def snapshot(self) -> ShapeSnapshot:
        """Return the current shapes together with the store revision."""
        return ShapeSnapshot(shapes=tuple(self._shapes), revision=self._revision)

    def add(self, shape: Shape) -> None:
        """Append a shape on top of the stack."""
        self._append(shape)
        self._revision += 1

    def move_to_top(self, shape_id: str) -> bool:
        """Re-append a shape at the top, keeping everyone else's relative order."""
        index = self._index_of(shape_id)
        if index is None:
            return False
        shape = self._shapes.pop(index)
        self._shapes.append(shape)
        self._revision += 1
        return True

    def set_position(self, shape_id: str, x: float, y: float) -> bool:
        """Move one shape's top-left corner."""
        index = self._index_of(shape_id)
        if index is None:
            return False
        self._shapes[index] = self._shapes[index].moved_to(x, y)
        self._revision += 1
        return True

    def replace(self, target_ids: Collection[str], replacements: Mapping[str, Sequence[Shape]]) -> bool:
        """Swap each targeted shape in-line for its replacement shapes.

        Untargeted shapes keep their place. A targeted shape with no entry in
        ``replacements`` is dropped.
        """
        if not any(shape.id in target_ids for shape in self._shapes):
            return False
        updated: list[Shape] = []
        for shape in self._shapes:
            if shape.id not in target_ids:
                updated.append(shape)
                continue
            updated.extend(replacements.get(shape.id, ()))
        _require_unique_ids(updated)
        self._shapes = updated
        self._revision += 1
        return True

    def _append(self, shape: Shape) -> None:
        if self._index_of(shape.id) is not None:
            raise ValueError(f"duplicate shape id {shape.id!r}")
        self._shapes.append(shape)

    def _index_of(self, shape_id: object) -> int | None:
        for index, shape in enumerate(self._shapes):
            if shape.id == shape_id:
                return index
        return None


def _require_unique_ids(shapes: Sequence[Shape]) -> None:
    seen: set[str] = set()
    for shape in shapes:
        if shape.id in seen:
            raise ValueError(f"duplicate shape id {shape.id!r}")
        seen.add(shape.id)
