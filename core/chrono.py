# core/chrono.py
from PySide6.QtCore import QObject, QTimer, Signal

from app.config import TICK_INTERVAL_MS


class CountdownTicker(QObject):
    """Emits `tick` once per interval while started."""

    tick = Signal()

    def __init__(self, interval_ms: int = TICK_INTERVAL_MS, parent=None):
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick.emit)

    def start(self):
        if not self._timer.isActive():
            self._timer.start()

    def stop(self):
        self._timer.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()

