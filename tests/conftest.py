import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QObject, Signal  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from services.lifecycle import TestController  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    return QApplication.instance() or QApplication([])


class ManualTicker(QObject):
    """Tick source advanced by hand, so countdowns run without wall-clock waits."""

    tick = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._active = False
        self.starts = 0
        self.stops = 0

    def start(self):
        if not self._active:
            self._active = True
            self.starts += 1

    def stop(self):
        if self._active:
            self._active = False
            self.stops += 1

    def is_active(self) -> bool:
        return self._active

    def fire(self, n: int = 1) -> int:
        fired = 0
        for _ in range(n):
            if not self._active:
                break
            self.tick.emit()
            fired += 1
        return fired


@pytest.fixture
def ticker(qapp) -> ManualTicker:
    return ManualTicker()


class RecordingSubmitter:
    def __init__(self):
        self.calls = []

    def __call__(self, submission):
        self.calls.append(submission)


@pytest.fixture
def submitter() -> RecordingSubmitter:
    return RecordingSubmitter()


@pytest.fixture
def controller(ticker, submitter) -> TestController:
    return TestController(submitter=submitter, ticker=ticker)
