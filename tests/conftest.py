"""Shared test fixtures."""

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PySide6.QtCore import QCoreApplication, QSettings  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from mathsets.app.state import AnimationController  # noqa: E402


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def settings_dir(tmp_path, qapp):
    QCoreApplication.setOrganizationName("mathsets-tests")
    QCoreApplication.setApplicationName("pascal-lab-tests")
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)
    QSettings.setPath(QSettings.Format.IniFormat, QSettings.Scope.UserScope, str(tmp_path))
    return tmp_path


@pytest.fixture
def controller(qapp) -> AnimationController:
    c = AnimationController(rows=4)
    yield c
    c.dispose()


class SignalRecorder:
    """Collects emissions of the controller's signals in order."""

    def __init__(self, controller: AnimationController):
        self.events: list[tuple] = []
        controller.progress_changed.connect(lambda step, total: self.events.append(("progress", step, total)))
        controller.completed.connect(lambda: self.events.append(("completed",)))
        controller.playback_changed.connect(lambda playing: self.events.append(("playback", playing)))
        controller.rows_changed.connect(lambda rows: self.events.append(("rows", rows)))

    def of(self, kind: str) -> list[tuple]:
        return [e for e in self.events if e[0] == kind]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def recorder(controller: AnimationController) -> SignalRecorder:
    return SignalRecorder(controller)
