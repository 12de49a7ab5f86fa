"""Qt frontend bootstrap and runtime wiring."""

from __future__ import annotations

from collections.abc import Callable

from pillsplitter.app.controller import CanvasController
from pillsplitter.qt.window import MainWindow

try:
    from PyQt6.QtWidgets import QApplication
except Exception as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for the UI. Install dependency 'PyQt6'.") from exc


def create_qt_frontend(controller: CanvasController) -> tuple[MainWindow, Callable[[], int]]:
    """Build the main window and the event-loop runner."""
    app = QApplication.instance() or QApplication([])
    window = MainWindow(controller)
    return window, app.exec
