# services/lifecycle.py
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Union

from PySide6.QtCore import QObject, Signal

from app.calculation import Metrics, compute_metrics
from app.config import DEFAULT_TIME_LIMIT_SECONDS
from app.errors import InvalidInput
from app.result import Submission, TestMetadata, assemble_result
from app.state import KeyEvent, SessionSnapshot, TestSession, TestStatus
from app.validation import segment_words
from core.chrono import CountdownTicker
from services.typing_engine import KeyOutcome, TypingEngine
from utils.file_handler import TextSource

log = logging.getLogger(__name__)

Submitter = Callable[[Submission], object]


class TestController(QObject):
    """
    Drives one TestSession through waiting -> running <-> paused -> finished.

    Keystrokes and ticks both land here. Finalize can be triggered by the
    countdown reaching zero, by the last word being committed, or by finish();
    whichever arrives first wins and the rest are no-ops.
    """

    changed = Signal()
    started = Signal()
    paused = Signal()
    resumed = Signal()
    ticked = Signal(int)
    finished = Signal(object)
    submissionFailed = Signal(object, str)

    def __init__(self, submitter: Optional[Submitter] = None, ticker=None, parent=None):
        super().__init__(parent)
        self._submit = submitter
        self._ticker = ticker if ticker is not None else CountdownTicker(parent=self)
        self._ticker.tick.connect(self._on_tick)
        self.session: Optional[TestSession] = None
        self.engine: Optional[TypingEngine] = None
        self.metadata = TestMetadata()

    # ---------- session management ----------
    def new_test(
        self,
        source: Union[TextSource, str, Iterable[str]],
        time_limit_seconds: Optional[int] = None,
        metadata: Optional[TestMetadata] = None,
    ) -> TestSession:
        words, recommended = self._words_from(source)
        if time_limit_seconds is not None:
            limit = time_limit_seconds
        elif recommended is not None:
            limit = recommended
        else:
            limit = DEFAULT_TIME_LIMIT_SECONDS
        if int(limit) <= 0:
            raise InvalidInput(f"time limit must be positive, got {limit}")

        self.abandon()
        self.session = TestSession(words=words, time_limit_seconds=int(limit))
        self.engine = TypingEngine(self.session)
        self.metadata = metadata or TestMetadata()
        log.info("New test: %d words, %ds limit", len(words), self.session.time_limit_seconds)
        self.changed.emit()
        return self.session

    def abandon(self):
        if self.session is None:
            return
        self._ticker.stop()
        log.info("Test abandoned in state %s", self.session.status.value)
        self.session = None
        self.engine = None

    @staticmethod
    def _words_from(source):
        recommended = None
        if isinstance(source, TextSource):
            words, recommended = tuple(source.words), source.recommended_time_limit_seconds
        elif isinstance(source, str):
            words = segment_words(source)
        else:
            words = tuple(source or ())
        if not words or not any(words):
            raise InvalidInput("target text contains no words")
        return words, recommended

    # ---------- transitions ----------
    def start(self) -> bool:
        s = self.session
        if s is None or s.status is not TestStatus.WAITING:
            log.debug("start ignored")
            return False
        s.status = TestStatus.RUNNING
        self._ticker.start()
        log.info("Test started")
        self.started.emit()
        self.changed.emit()
        return True

    def pause(self) -> bool:
        s = self.session
        if s is None or s.status is not TestStatus.RUNNING or s.finalizing:
            log.debug("pause ignored")
            return False
        self._ticker.stop()
        s.status = TestStatus.PAUSED
        log.info("Test paused at %ds remaining", s.time_remaining_seconds)
        self.paused.emit()
        self.changed.emit()
        return True

    def resume(self) -> bool:
        s = self.session
        if s is None or s.status is not TestStatus.PAUSED:
            log.debug("resume ignored")
            return False
        s.status = TestStatus.RUNNING
        self._ticker.start()
        log.info("Test resumed at %ds remaining", s.time_remaining_seconds)
        self.resumed.emit()
        self.changed.emit()
        return True

    def toggle_pause(self) -> bool:
        if self.session is not None and self.session.status is TestStatus.PAUSED:
            return self.resume()
        return self.pause()

    def finish(self) -> Optional[Submission]:
        return self._finalize("finish requested")

    # ---------- event sources ----------
    def handle_key(self, event: KeyEvent) -> KeyOutcome:
        if self.engine is None:
            return KeyOutcome.IGNORED
        outcome = self.engine.process_key(event)
        if outcome is KeyOutcome.START:
            self.start()
        elif outcome is KeyOutcome.COMPLETED:
            self.changed.emit()
            self._finalize("last word committed")
        elif outcome is not KeyOutcome.IGNORED:
            self.changed.emit()
        return outcome

    def _on_tick(self):
        s = self.session
        if s is None or s.status is not TestStatus.RUNNING or s.finalizing:
            return
        s.time_remaining_seconds = max(0, s.time_remaining_seconds - 1)
        s.wpm_history.append(compute_metrics(s).wpm)
        self.ticked.emit(s.time_remaining_seconds)
        self.changed.emit()
        if s.time_remaining_seconds == 0:
            self._finalize("time expired")

    # ---------- finalize ----------
    def _finalize(self, reason: str) -> Optional[Submission]:
        s = self.session
        if s is None or s.finalizing or not s.is_active:
            log.debug("finalize (%s) ignored", reason)
            return None

        s.finalizing = True
        try:
            self._ticker.stop()
            # the word in progress counts as if space had been pressed
            self.engine.commit_current()
            s.status = TestStatus.FINISHED
            metrics = compute_metrics(s)
            submission = assemble_result(s, metrics, self.metadata)
        finally:
            s.finalizing = False

        r = submission.result
        log.info(
            "Test finished (%s): %d WPM, %d%% accuracy, %d errors in %ds",
            reason, r.wpm, r.accuracy, r.error_count, r.time_taken_seconds,
        )
        self.changed.emit()
        self.finished.emit(submission)
        self._hand_off(submission)
        return submission

    def _hand_off(self, submission: Submission):
        if self._submit is None:
            return
        try:
            self._submit(submission)
        except Exception as e:
            log.warning("Failed to submit result %s: %s", submission.result.test_id, e)
            self.submissionFailed.emit(submission, str(e))

    # ---------- read side ----------
    def live_metrics(self) -> Optional[Metrics]:
        if self.session is None:
            return None
        return compute_metrics(self.session)

    def snapshot(self) -> Optional[SessionSnapshot]:
        s = self.session
        if s is None:
            return None
        m = compute_metrics(s)
        return SessionSnapshot(
            status=s.status,
            words=s.words,
            current_word_index=s.current_word_index,
            current_input=s.current_input,
            completed_words=tuple(s.completed_words),
            word_errors=frozenset(s.word_errors),
            time_limit_seconds=s.time_limit_seconds,
            time_remaining_seconds=s.time_remaining_seconds,
            wpm=m.wpm,
            accuracy=m.accuracy,
            wpm_history=tuple(s.wpm_history),
        )
