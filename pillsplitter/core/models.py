"""Core domain models used by the splitter logic."""

from __future__ import annotations

from dataclasses import dataclass

from pillsplitter.core.geometry import Rect

DEFAULT_PALETTE: tuple[str, ...] = (
    "#f87171",
    "#fb923c",
    "#fbbf24",
    "#a3e635",
    "#34d399",
    "#22d3ee",
    "#60a5fa",
    "#a78bfa",
    "#f472b6",
)


@dataclass(frozen=True, slots=True)
class Shape:
    """Rectangular pill placed on the canvas."""

    id: str
    x: float
    y: float
    w: float
    h: float
    color: str

    def __post_init__(self) -> None:
        if self.w <= 0 or self.h <= 0:
            raise ValueError(f"shape {self.id!r} must have positive size, got {self.w}x{self.h}")

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.w, self.h)

    @property
    def center_x(self) -> float:
        return self.x + self.w / 2

    @property
    def center_y(self) -> float:
        return self.y + self.h / 2

    def moved_to(self, x: float, y: float) -> Shape:
        """Return a copy at a new top-left position; size, color and id are kept."""
        return Shape(id=self.id, x=x, y=y, w=self.w, h=self.h, color=self.color)
