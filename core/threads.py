# core/threads.py
import logging

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

log = logging.getLogger(__name__)


class SubmissionWorkerSignals(QObject):
    submitted = Signal(object)
    failed = Signal(object, str)


class SubmissionWorker(QRunnable):
    def __init__(self, submit, submission):
        super().__init__()
        self.submit = submit
        self.submission = submission
        self.signals = SubmissionWorkerSignals()

    def run(self):
        try:
            self.submit(self.submission)
            self.signals.submitted.emit(self.submission)
        except Exception as e:
            log.warning("Background submission failed: %s", e)
            self.signals.failed.emit(self.submission, str(e))


class ThreadedSubmitter(QObject):
    """
    Hands submissions to a blocking submitter on the global thread pool.
    Returns immediately; the outcome arrives through `submitted` / `failed`.
    """

    submitted = Signal(object)
    failed = Signal(object, str)

    def __init__(self, submit, pool=None, parent=None):
        super().__init__(parent)
        self._submit = submit
        self._pool = pool or QThreadPool.globalInstance()
        # the pool deletes each runnable after run(); its signals object must outlive it
        self._inflight = set()

    def __call__(self, submission):
        self._pool.start(self.make_worker(submission))

    def make_worker(self, submission) -> SubmissionWorker:
        worker = SubmissionWorker(self._submit, submission)
        self._inflight.add(worker.signals)
        worker.signals.submitted.connect(self._on_submitted)
        worker.signals.failed.connect(self._on_failed)
        return worker

    @Slot(object)
    def _on_submitted(self, submission):
        self._inflight.discard(self.sender())
        self.submitted.emit(submission)

    @Slot(object, str)
    def _on_failed(self, submission, message):
        self._inflight.discard(self.sender())
        self.failed.emit(submission, message)
