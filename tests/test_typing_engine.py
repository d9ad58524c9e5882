from app.state import BACKSPACE, ENTER, SPACE, KeyEvent, TestSession, TestStatus
from services.typing_engine import KeyOutcome, TypingEngine


def running_engine(*words: str) -> TypingEngine:
    session = TestSession(words=words, time_limit_seconds=60, status=TestStatus.RUNNING)
    return TypingEngine(session)


def press(engine: TypingEngine, keys: str) -> list:
    return [engine.process_key(KeyEvent(k)) for k in keys]


def assert_invariants(s: TestSession) -> None:
    assert s.current_word_index == len(s.completed_words)
    assert all(i < s.current_word_index for i in s.word_errors)


def test_enter_in_waiting_requests_start() -> None:
    engine = TypingEngine(TestSession(words=("a",), time_limit_seconds=60))
    assert engine.process_key(KeyEvent(ENTER)) is KeyOutcome.START
    assert engine.session.status is TestStatus.WAITING


def test_typing_before_start_is_ignored() -> None:
    engine = TypingEngine(TestSession(words=("cat",), time_limit_seconds=60))
    assert press(engine, "ca") == [KeyOutcome.IGNORED, KeyOutcome.IGNORED]
    assert engine.session.current_input == ""


def test_exact_word_commits_without_error() -> None:
    engine = running_engine("the", "cat")
    press(engine, "the ")
    s = engine.session
    assert s.completed_words == ["the"]
    assert s.word_errors == set()
    assert s.current_word_index == 1
    assert s.current_input == ""
    assert_invariants(s)


def test_leading_space_never_advances() -> None:
    engine = running_engine("the", "cat")
    assert engine.process_key(KeyEvent(SPACE)) is KeyOutcome.IGNORED
    assert engine.session.current_word_index == 0
    press(engine, "the ")
    assert engine.process_key(KeyEvent(SPACE)) is KeyOutcome.IGNORED
    assert engine.session.current_word_index == 1


def test_misspelled_word_is_flagged() -> None:
    engine = running_engine("the")
    outcomes = press(engine, "teh ")
    assert outcomes[-1] is KeyOutcome.COMPLETED
    assert engine.session.word_errors == {0}
    assert engine.session.completed_words == ["teh"]


def test_last_commit_reports_completion() -> None:
    engine = running_engine("the", "cat")
    outcomes = press(engine, "the cat ")
    assert outcomes[3] is KeyOutcome.COMMITTED
    assert outcomes[-1] is KeyOutcome.COMPLETED
    assert engine.session.is_last_word_done


def test_overtyping_is_kept() -> None:
    engine = running_engine("cat", "dog")
    press(engine, "catsss ")
    assert engine.session.completed_words == ["catsss"]
    assert engine.session.word_errors == {0}


def test_backspace_deletes_within_word() -> None:
    engine = running_engine("cat")
    press(engine, "ca")
    assert engine.process_key(KeyEvent(BACKSPACE)) is KeyOutcome.DELETED
    assert engine.process_key(KeyEvent(BACKSPACE)) is KeyOutcome.DELETED
    s = engine.session
    assert s.current_input == ""
    assert s.current_word_index == 0
    assert s.completed_words == []


def test_backspace_at_first_word_start_is_noop() -> None:
    engine = running_engine("cat")
    assert engine.process_key(KeyEvent(BACKSPACE)) is KeyOutcome.IGNORED
    assert engine.session.current_word_index == 0


def test_backspace_reopens_previous_word_and_clears_error() -> None:
    engine = running_engine("the", "cat")
    press(engine, "teh ")
    assert engine.session.word_errors == {0}
    assert engine.process_key(KeyEvent(BACKSPACE)) is KeyOutcome.REOPENED
    s = engine.session
    assert s.current_word_index == 0
    assert s.current_input == "teh"
    assert s.completed_words == []
    assert s.word_errors == set()
    assert_invariants(s)

    press(engine, "\b")  # not a recognised key
    for _ in range(2):
        engine.process_key(KeyEvent(BACKSPACE))
    press(engine, "he ")
    assert s.completed_words == ["the"]
    assert s.word_errors == set()


def test_chorded_characters_are_rejected() -> None:
    engine = running_engine("cat")
    assert engine.process_key(KeyEvent("c", ctrl=True)) is KeyOutcome.IGNORED
    assert engine.process_key(KeyEvent("a", alt=True)) is KeyOutcome.IGNORED
    assert engine.process_key(KeyEvent("t", meta=True)) is KeyOutcome.IGNORED
    assert engine.session.current_input == ""


def test_non_character_keys_are_ignored() -> None:
    engine = running_engine("cat")
    for key in (ENTER, "Tab", "ArrowLeft", "\t"):
        assert engine.process_key(KeyEvent(key)) is KeyOutcome.IGNORED
    assert engine.session.current_input == ""


def test_paused_and_finished_ignore_input() -> None:
    engine = running_engine("cat")
    for status in (TestStatus.PAUSED, TestStatus.FINISHED):
        engine.session.status = status
        assert press(engine, "c ") == [KeyOutcome.IGNORED, KeyOutcome.IGNORED]
        assert engine.process_key(KeyEvent(BACKSPACE)) is KeyOutcome.IGNORED
    assert engine.session.current_input == ""


def test_commit_current_refuses_empty_buffer() -> None:
    engine = running_engine("cat")
    assert engine.commit_current() is False
    press(engine, "ca")
    assert engine.commit_current() is True
    assert engine.session.word_errors == {0}


def test_invariants_hold_over_mixed_sequence() -> None:
    engine = running_engine("one", "two", "three", "four")
    keys = ["o", "n", "x", SPACE, BACKSPACE, BACKSPACE, "e", SPACE, SPACE, "t", "w",
            SPACE, BACKSPACE, BACKSPACE, BACKSPACE, BACKSPACE, BACKSPACE, BACKSPACE, "z", SPACE]
    for key in keys:
        engine.process_key(KeyEvent(key))
        assert_invariants(engine.session)
