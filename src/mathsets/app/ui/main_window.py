"""
Main Application Window
=======================
Hosts the work area and the global actions (theme toggle, reset all).

The window owns the AnimationController and disposes of it on close, so no
tick can fire into a window that is being torn down.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QSettings
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QToolBar, QWidget

from mathsets.app.application import VISIBLE_APP_NAME
from mathsets.app.render import Theme
from mathsets.app.state import AnimationController
from mathsets.app.ui.workarea import WorkArea
from mathsets.config import DEFAULT_ROWS, DEFAULT_SPEED

logger = logging.getLogger(__name__)

THEME_SETTINGS_KEY = "ui/theme"


class MainWindow(QMainWindow):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 760)

        self._settings = QSettings()
        self.controller = AnimationController(parent=self)

        self.work_area = WorkArea(self.controller, self)
        self.setCentralWidget(self.work_area)

        # ---- Toolbar ----
        tb = QToolBar("Principal", self)
        tb.setMovable(False)
        self.addToolBar(tb)

        self.act_dark = QAction("Thème sombre", self)
        self.act_dark.setCheckable(True)
        self.act_dark.toggled.connect(self.on_dark_toggled)
        tb.addAction(self.act_dark)

        self.act_reset_all = QAction("Réinitialiser", self)
        self.act_reset_all.setToolTip("Vitesse 1x, 6 lignes, animation remise à zéro")
        self.act_reset_all.triggered.connect(self.reset_all)
        tb.addAction(self.act_reset_all)

        self.act_dark.setChecked(self._load_theme() is Theme.DARK)
        self.apply_theme(self._load_theme())

        self.controller.completed.connect(self.on_completed)

    @property
    def theme(self) -> Theme:
        return self.work_area.canvas.theme

    def apply_theme(self, theme: Theme) -> None:
        self.work_area.canvas.set_theme(theme)

    def on_dark_toggled(self, checked: bool) -> None:
        theme = Theme.DARK if checked else Theme.LIGHT
        self.apply_theme(theme)
        self._settings.setValue(THEME_SETTINGS_KEY, theme.value)
        logger.debug(f"Theme switched to {theme.value}.")

    def on_completed(self) -> None:
        self.statusBar().showMessage("Triangle terminé !", 3000)

    def reset_all(self) -> None:
        """Back to the defaults: 1x speed, default row count, nothing revealed."""
        self.controller.pause()
        self.controller.set_speed(DEFAULT_SPEED)
        self.work_area.panel.sync_speed(DEFAULT_SPEED)
        if self.controller.rows != DEFAULT_ROWS:
            self.controller.set_row_count(DEFAULT_ROWS)
        else:
            self.controller.reset()
        logger.info("Lab reset to defaults.")

    def closeEvent(self, e) -> None:
        self.controller.dispose()
        super().closeEvent(e)

    def _load_theme(self) -> Theme:
        value = self._settings.value(THEME_SETTINGS_KEY, Theme.LIGHT.value, type=str)
        try:
            return Theme(value)
        except ValueError:
            logger.warning(f"Unknown theme '{value}' in settings, using light.")
            return Theme.LIGHT
