from mathsets.app.ui.panels.base import BasePanel
from mathsets.app.ui.panels.pascal_controls import PascalControlPanel

__all__ = ["BasePanel", "PascalControlPanel"]
