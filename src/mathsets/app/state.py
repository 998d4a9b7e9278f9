"""
Animation Controller
====================
The single owner of the animation state: row count, step index, playback and
speed. Views never mutate this state directly; they call the operations below
and listen to the signals.

Signals are emitted strictly after the mutation that causes them, so a slot
always observes a consistent (triangle, step) pair.
"""
from __future__ import annotations

import logging
from enum import Enum

from PySide6.QtCore import QObject, QTimer, Signal

from mathsets.config import BASE_INTERVAL_MS, DEFAULT_ROWS, DEFAULT_SPEED, MAX_ROWS, MIN_ROWS
from mathsets.exceptions import InvalidRowCountError
from mathsets.model.pascal import Cell, Triangle, build_triangle, step_to_cell, total_steps
from mathsets.app.render import Frame, Theme, render

logger = logging.getLogger(__name__)


class Playback(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"


class AnimationController(QObject):
    """Step-indexed state machine driving the Pascal's triangle animation."""
    # (step_index, total_steps); step_index is -1 before the first reveal
    progress_changed = Signal(int, int)
    completed = Signal()
    playback_changed = Signal(bool)
    rows_changed = Signal(int)

    def __init__(self, rows: int = DEFAULT_ROWS, speed: float = DEFAULT_SPEED, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._validate_rows(rows)
        self._validate_speed(speed)

        self._rows: int = rows
        self._triangle: Triangle = build_triangle(rows)
        self._total: int = total_steps(rows)
        self._step_index: int = -1
        self._playback: Playback = Playback.STOPPED
        self._speed: float = speed
        self._disposed: bool = False

        self.timer = QTimer(self)
        self.timer.setInterval(self.interval_ms)
        self.timer.timeout.connect(self.tick)

    # ------------------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def triangle(self) -> Triangle:
        return self._triangle

    @property
    def total_steps(self) -> int:
        return self._total

    @property
    def step_index(self) -> int:
        return self._step_index

    @property
    def playback(self) -> Playback:
        return self._playback

    @property
    def is_playing(self) -> bool:
        return self._playback is Playback.PLAYING

    @property
    def is_complete(self) -> bool:
        return self._step_index >= self._total - 1

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def interval_ms(self) -> int:
        return max(1, round(BASE_INTERVAL_MS / self._speed))

    def active_addition(self) -> Cell | None:
        """The interior cell revealed by the current step, None for edge cells or before the first step."""
        if self._step_index < 0:
            return None
        cell = step_to_cell(self._step_index, self._rows)
        return None if cell.is_edge else cell

    # ------------------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------------------

    def set_row_count(self, rows: int) -> None:
        """
        Rebuild the triangle for a new row count and start over.

        Raises:
            InvalidRowCountError: If rows is outside [MIN_ROWS, MAX_ROWS]. The
                current state is left untouched.
        """
        try:
            self._validate_rows(rows)
        except InvalidRowCountError:
            logger.warning(f"Rejected row count {rows!r}.")
            raise

        # cancel before touching the triangle so no tick sees the new rows with an old step
        was_playing = self._stop_timer()
        self._rows = rows
        self._triangle = build_triangle(rows)
        self._total = total_steps(rows)
        self._step_index = -1
        logger.debug(f"Row count set to {rows} ({self._total} steps).")

        if was_playing:
            self.playback_changed.emit(False)
        self.rows_changed.emit(rows)
        self.progress_changed.emit(self._step_index, self._total)

    def advance_one(self) -> None:
        """Reveal the next cell. Saturates at the last step."""
        if self._step_index < self._total - 1:
            self._step_index += 1

        finished = self.is_playing and self.is_complete
        if finished:
            self._stop_timer()

        self.progress_changed.emit(self._step_index, self._total)
        if finished:
            logger.debug("Auto-play reached the last step.")
            self.playback_changed.emit(False)
            self.completed.emit()

    def step(self) -> None:
        """Manual single step: stop auto-play first, then advance."""
        self.pause()
        self.advance_one()

    def play(self) -> None:
        """Start auto-play. Does nothing once the triangle is complete or the controller is disposed."""
        if self._disposed:
            logger.warning("play() called on a disposed controller.")
            return
        if self.is_playing:
            return
        if self.is_complete:
            logger.debug("play() ignored: already at the last step.")
            return

        self._playback = Playback.PLAYING
        self.timer.start(self.interval_ms)
        logger.debug(f"Playing at {self._speed}x ({self.interval_ms} ms per step).")
        self.playback_changed.emit(True)

    def pause(self) -> None:
        if self._stop_timer():
            logger.debug(f"Paused at step {self._step_index}.")
            self.playback_changed.emit(False)

    def toggle_play(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def reset(self) -> None:
        """Hide every cell again. The row count is kept."""
        was_playing = self._stop_timer()
        self._step_index = -1
        logger.debug("Animation reset.")

        if was_playing:
            self.playback_changed.emit(False)
        self.progress_changed.emit(self._step_index, self._total)

    def set_speed(self, speed: float) -> None:
        """
        Change the speed multiplier; the tick interval becomes BASE_INTERVAL_MS / speed.

        Raises:
            ValueError: If speed is not positive.
        """
        self._validate_speed(speed)
        self._speed = float(speed)
        # QTimer restarts an active timer on setInterval
        self.timer.setInterval(self.interval_ms)

    def tick(self) -> None:
        """Timer slot. A tick that arrives after playback stopped is dropped."""
        if self._disposed or not self.is_playing:
            return
        self.advance_one()

    def dispose(self) -> None:
        """Cancel the periodic tick for good. Call before dropping the controller."""
        self._stop_timer()
        if not self._disposed:
            self.timer.timeout.disconnect(self.tick)
            self._disposed = True

    def render(self, width: float, height: float, theme: Theme = Theme.LIGHT) -> Frame:
        return render(self._triangle, self._step_index, self.active_addition(), width, height, theme)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _stop_timer(self) -> bool:
        """Stop ticking and return whether playback was running."""
        self.timer.stop()
        was_playing = self.is_playing
        self._playback = Playback.STOPPED
        return was_playing

    @staticmethod
    def _validate_rows(rows: int) -> None:
        if isinstance(rows, bool) or not isinstance(rows, int) or not MIN_ROWS <= rows <= MAX_ROWS:
            raise InvalidRowCountError(rows, minimum=MIN_ROWS, maximum=MAX_ROWS)

    @staticmethod
    def _validate_speed(speed: float) -> None:
        if isinstance(speed, bool) or not isinstance(speed, (int, float)) or not speed > 0:
            raise ValueError(f"Speed must be a positive number, got {speed!r}.")
