from PySide6.QtCore import QThreadPool

from app.result import Submission, TestMetadata, TestResult
from core.chrono import CountdownTicker
from core.threads import ThreadedSubmitter


def test_countdown_ticker_start_stop(qapp) -> None:
    ticker = CountdownTicker(interval_ms=1000)
    assert not ticker.is_active()
    ticker.start()
    assert ticker.is_active()
    ticker.stop()
    assert not ticker.is_active()


def test_manual_ticker_only_fires_while_active(ticker) -> None:
    seen = []
    ticker.tick.connect(lambda: seen.append(1))
    assert ticker.fire(3) == 0
    ticker.start()
    ticker.start()
    assert ticker.fire(3) == 3
    ticker.stop()
    assert ticker.fire() == 0
    assert len(seen) == 3
    assert (ticker.starts, ticker.stops) == (1, 1)


def _submission() -> Submission:
    return Submission(TestResult(1, 2, 0, 60, 5, "t1"), TestMetadata(), 10, "hello")


def test_submission_worker_reports_success(qapp) -> None:
    calls, ok = [], []
    submitter = ThreadedSubmitter(calls.append)
    submitter.submitted.connect(ok.append)
    worker = submitter.make_worker(_submission())
    worker.run()
    assert calls == [_submission()]
    assert ok == [_submission()]


def test_submission_worker_reports_failure(qapp) -> None:
    def broken(_sub):
        raise RuntimeError("server said no")

    failures = []
    submitter = ThreadedSubmitter(broken)
    submitter.failed.connect(lambda sub, msg: failures.append(msg))
    submitter.make_worker(_submission()).run()
    assert failures == ["server said no"]


def test_threaded_submitter_runs_on_pool(qapp) -> None:
    calls, ok = [], []
    pool = QThreadPool()
    submitter = ThreadedSubmitter(calls.append, pool=pool)
    submitter.submitted.connect(ok.append)
    submitter(_submission())
    assert pool.waitForDone(5000)
    qapp.processEvents()
    assert calls == [_submission()]
    assert ok == [_submission()]
    assert not submitter._inflight


def test_threaded_submitter_reports_pool_failure(qapp) -> None:
    def broken(_sub):
        raise RuntimeError("disk full")

    failures = []
    pool = QThreadPool()
    submitter = ThreadedSubmitter(broken, pool=pool)
    submitter.failed.connect(lambda sub, msg: failures.append((sub, msg)))
    submitter(_submission())
    assert pool.waitForDone(5000)
    qapp.processEvents()
    assert failures == [(_submission(), "disk full")]
