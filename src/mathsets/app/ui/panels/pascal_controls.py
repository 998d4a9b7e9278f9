"""
Pascal's Triangle Control Panel
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFormLayout, QGroupBox, QHBoxLayout, QLabel, QPushButton, QSlider, QStyle, QVBoxLayout, QWidget
)

from mathsets.app.state import AnimationController
from mathsets.app.ui.panels.base import BasePanel
from mathsets.config import MAX_ROWS, MAX_SPEED, MIN_ROWS, MIN_SPEED, SPEED_STEP
from mathsets.exceptions import InvalidRowCountError

logger = logging.getLogger(__name__)


class PascalControlPanel(BasePanel):
    """Row count, speed, playback buttons and the step readout."""
    def __init__(self, controller: AnimationController, parent: QWidget | None = None) -> None:
        super().__init__(controller, parent)

        layout = QVBoxLayout(self)

        # --- Settings ---
        grp_settings = QGroupBox("Contrôles")
        form = QFormLayout(grp_settings)

        self.lbl_rows = QLabel()
        self.slider_rows = QSlider(Qt.Orientation.Horizontal)
        self.slider_rows.setRange(MIN_ROWS, MAX_ROWS)
        self.slider_rows.setSingleStep(1)
        self.slider_rows.setValue(controller.rows)
        self.slider_rows.valueChanged.connect(self.on_rows_changed)
        form.addRow("Nombre de lignes :", self._with_value(self.slider_rows, self.lbl_rows))

        # speed slider works in SPEED_STEP units: 1 -> 0.5x ... 6 -> 3x
        self.lbl_speed = QLabel()
        self.slider_speed = QSlider(Qt.Orientation.Horizontal)
        self.slider_speed.setRange(self._speed_to_tick(MIN_SPEED), self._speed_to_tick(MAX_SPEED))
        self.slider_speed.setValue(self._speed_to_tick(controller.speed))
        self.slider_speed.valueChanged.connect(self.on_speed_changed)
        form.addRow("Vitesse :", self._with_value(self.slider_speed, self.lbl_speed))

        layout.addWidget(grp_settings)

        # --- Playback ---
        hbox_play = QHBoxLayout()

        self.btn_play = QPushButton()
        self.btn_play.setToolTip("Lecture automatique")
        self.btn_play.clicked.connect(self.controller.toggle_play)
        hbox_play.addWidget(self.btn_play)

        self.btn_step = QPushButton()
        self.btn_step.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaSkipForward))
        self.btn_step.setToolTip("Pas à pas")
        self.btn_step.clicked.connect(self.controller.step)
        hbox_play.addWidget(self.btn_step)

        self.btn_reset = QPushButton()
        self.btn_reset.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_BrowserReload))
        self.btn_reset.setToolTip("Réinitialiser")
        self.btn_reset.clicked.connect(self.controller.reset)
        hbox_play.addWidget(self.btn_reset)

        layout.addLayout(hbox_play)

        self.lbl_progress = QLabel()
        self.lbl_progress.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.lbl_progress)

        # --- Explanation ---
        grp_info = QGroupBox("Principe")
        l_info = QVBoxLayout(grp_info)
        lbl_info = QLabel(
            "Chaque nombre est la <b>somme des deux nombres</b> situés au-dessus de lui. "
            "Les bords sont toujours <b>1</b>."
        )
        lbl_info.setWordWrap(True)
        lbl_info.setTextFormat(Qt.TextFormat.RichText)
        l_info.addWidget(lbl_info)

        lbl_formula = QLabel("C(n, k) = C(n-1, k-1) + C(n-1, k)")
        lbl_formula.setAlignment(Qt.AlignmentFlag.AlignCenter)
        lbl_formula.setStyleSheet("QLabel { font-family: monospace; padding: 5px; }")
        l_info.addWidget(lbl_formula)

        layout.addWidget(grp_info)
        layout.addStretch()

        controller.progress_changed.connect(self.on_progress)
        controller.playback_changed.connect(self.update_play_icon)
        controller.rows_changed.connect(self.sync_rows)

        self.lbl_rows.setText(str(controller.rows))
        self.lbl_speed.setText(self._format_speed(controller.speed))
        self.on_progress(controller.step_index, controller.total_steps)
        self.update_play_icon(controller.is_playing)

    # --- SLOTS ---

    def on_rows_changed(self, value: int) -> None:
        try:
            self.controller.set_row_count(value)
        except InvalidRowCountError as e:
            logger.error(f"Row count not applied: {e}")
            self.sync_rows(self.controller.rows)

    def on_speed_changed(self, tick: int) -> None:
        speed = tick * SPEED_STEP
        self.controller.set_speed(speed)
        self.lbl_speed.setText(self._format_speed(speed))

    def on_progress(self, step_index: int, total: int) -> None:
        self.lbl_progress.setText(f"Étape : {max(0, step_index + 1)} / {total}")

    def update_play_icon(self, playing: bool) -> None:
        if playing:
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPause))
            self.btn_play.setToolTip("Pause")
        else:
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))
            self.btn_play.setToolTip("Lecture automatique")

    def sync_rows(self, rows: int) -> None:
        """Reflect a row count set elsewhere without re-triggering the controller."""
        self.slider_rows.blockSignals(True)
        self.slider_rows.setValue(rows)
        self.slider_rows.blockSignals(False)
        self.lbl_rows.setText(str(rows))

    def sync_speed(self, speed: float) -> None:
        self.slider_speed.blockSignals(True)
        self.slider_speed.setValue(self._speed_to_tick(speed))
        self.slider_speed.blockSignals(False)
        self.lbl_speed.setText(self._format_speed(speed))

    # --- HELPERS ---

    @staticmethod
    def _speed_to_tick(speed: float) -> int:
        return round(speed / SPEED_STEP)

    @staticmethod
    def _format_speed(speed: float) -> str:
        return f"{speed:g}x"

    @staticmethod
    def _with_value(slider: QSlider, label: QLabel) -> QWidget:
        row = QWidget()
        h = QHBoxLayout(row)
        h.setContentsMargins(0, 0, 0, 0)
        h.addWidget(slider, 1)
        label.setMinimumWidth(32)
        label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        h.addWidget(label)
        return row
