"""Main Qt window hosting the pill canvas."""

from __future__ import annotations

from pillsplitter.app.controller import CanvasController
from pillsplitter.qt.canvas import SplitterCanvas

try:
    from PyQt6.QtWidgets import QMainWindow
except Exception as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for the UI. Install dependency 'PyQt6'.") from exc

WINDOW_TITLE = "Pill Splitter"
DEFAULT_SIZE = (1200, 720)


class MainWindow(QMainWindow):
    def __init__(self, controller: CanvasController) -> None:
        super().__init__()
        self._controller = controller
        self._canvas = SplitterCanvas(controller.ui_state, shape_radius=controller.config.shape_radius)
        controller.bind(self._canvas)
        self.setCentralWidget(self._canvas)
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(*DEFAULT_SIZE)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._controller.unbind()
        super().closeEvent(event)
