from __future__ import annotations

from PySide6.QtWidgets import QWidget

from mathsets.app.state import AnimationController


class BasePanel(QWidget):
    """Base class for left-side panels. Holds a reference to the animation controller."""
    def __init__(self, controller: AnimationController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
