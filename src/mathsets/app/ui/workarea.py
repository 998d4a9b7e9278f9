from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QSplitter, QVBoxLayout

from mathsets.app.state import AnimationController
from mathsets.app.ui.canvas import PascalCanvas
from mathsets.app.ui.panels.pascal_controls import PascalControlPanel


class WorkArea(QWidget):
    """The main work area with a splitter between the control panel and the triangle canvas."""
    def __init__(self, controller: AnimationController, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        v = QVBoxLayout(self)
        split = QSplitter(Qt.Orientation.Horizontal, self)
        split.setChildrenCollapsible(False)
        v.addWidget(split, 1)

        self.panel = PascalControlPanel(controller, split)
        self.canvas = PascalCanvas(controller, split)

        split.addWidget(self.panel)
        split.addWidget(self.canvas)
        split.setStretchFactor(0, 0)
        split.setStretchFactor(1, 1)
        split.setSizes([300, 900])
