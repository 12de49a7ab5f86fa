"""Shape id sources."""

from __future__ import annotations

from collections.abc import Callable
from uuid import uuid4

IdSource = Callable[[], str]


class SequentialIds:
    """Monotonic counter-based ids (``shape-1``, ``shape-2``, ...)."""

    def __init__(self, prefix: str = "shape", start: int = 1) -> None:
        self._prefix = prefix
        self._next = start

    def __call__(self) -> str:
        value = f"{self._prefix}-{self._next}"
        self._next += 1
        return value


def uuid_ids() -> str:
    """Return a random hex id."""
    return uuid4().hex
