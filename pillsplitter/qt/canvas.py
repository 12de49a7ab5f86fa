"""Qt canvas that feeds pointer events to the controller and paints its view."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pillsplitter.app.events import POINTER_DOWN, POINTER_MOVE, POINTER_UP, PRIMARY_BUTTON
from pillsplitter.app.ui_state import CanvasUIState
from pillsplitter.core.geometry import Rect

try:
    from PyQt6.QtCore import QPointF, QRectF, Qt
    from PyQt6.QtGui import QColor, QMouseEvent, QPainter, QPen
    from PyQt6.QtWidgets import QWidget
except Exception as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for the UI. Install dependency 'PyQt6'.") from exc

BACKGROUND = "#cfe1fb"
SHAPE_BORDER = "#1e293b"
PREVIEW_BORDER = "#f43f5e"
PREVIEW_FILL = QColor(251, 113, 133, 26)
CROSSHAIR = QColor(71, 85, 105, 204)
CROSSHAIR_WIDTH = 3.0


class SplitterCanvas(QWidget):
    """Pointer event source and renderer for the pill canvas.

    Qt keeps delivering move/release events to the widget that received the
    press, with positions relative to it, even when the pointer leaves the
    widget, so the canvas doubles as the gesture capture source.
    """

    def __init__(self, view: Callable[[], CanvasUIState], *, shape_radius: float = 14.0) -> None:
        super().__init__()
        self._view = view
        self._shape_radius = shape_radius
        self._handlers: dict[str, list[Callable[[dict[str, Any]], None]]] = {}
        self.setMouseTracking(True)
        self.setCursor(Qt.CursorShape.CrossCursor)

    def add_event_handler(self, handler: Callable[[dict[str, Any]], None], *types: str) -> None:
        for event_type in types:
            self._handlers.setdefault(event_type, []).append(handler)

    def remove_event_handler(self, handler: Callable[[dict[str, Any]], None], *types: str) -> None:
        for event_type in types:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

    def emit(self, event_type: str, x: float, y: float, button: int) -> None:
        event = {"event_type": event_type, "x": x, "y": y, "button": button}
        for handler in list(self._handlers.get(event_type, [])):
            handler(event)
        self.update()

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        pos = event.position()
        self.emit(POINTER_DOWN, pos.x(), pos.y(), _button_number(event))

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        pos = event.position()
        self.emit(POINTER_MOVE, pos.x(), pos.y(), 0)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        pos = event.position()
        self.emit(POINTER_UP, pos.x(), pos.y(), _button_number(event))

    def paintEvent(self, event) -> None:  # type: ignore[override]
        del event
        ui = self._view()
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(BACKGROUND))
        for shape in ui.shapes:
            painter.setPen(QPen(QColor(SHAPE_BORDER), 2))
            painter.setBrush(QColor(shape.color))
            self._draw_pill(painter, shape.rect)
        if ui.preview is not None:
            pen = QPen(QColor(PREVIEW_BORDER), 2)
            pen.setStyle(Qt.PenStyle.DashLine)
            painter.setPen(pen)
            painter.setBrush(PREVIEW_FILL)
            self._draw_pill(painter, ui.preview)
        self._draw_crosshair(painter, ui.cursor_x, ui.cursor_y)
        painter.end()

    def _draw_pill(self, painter: QPainter, rect: Rect) -> None:
        radius = min(self._shape_radius, rect.w / 2, rect.h / 2)
        painter.drawRoundedRect(QRectF(rect.x, rect.y, rect.w, rect.h), radius, radius)

    def _draw_crosshair(self, painter: QPainter, x: float, y: float) -> None:
        painter.setPen(QPen(CROSSHAIR, CROSSHAIR_WIDTH))
        painter.drawLine(QPointF(x, 0.0), QPointF(x, float(self.height())))
        painter.drawLine(QPointF(0.0, y), QPointF(float(self.width()), y))


def _button_number(event: QMouseEvent) -> int:
    button = event.button()
    if button == Qt.MouseButton.LeftButton:
        return PRIMARY_BUTTON
    if button == Qt.MouseButton.RightButton:
        return 2
    if button == Qt.MouseButton.MiddleButton:
        return 3
    return 0
