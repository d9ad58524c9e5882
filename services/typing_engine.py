# services/typing_engine.py
from enum import Enum

from app.state import BACKSPACE, ENTER, SPACE, KeyEvent, TestSession, TestStatus


class KeyOutcome(Enum):
    IGNORED = "ignored"
    START = "start"
    TYPED = "typed"
    DELETED = "deleted"
    REOPENED = "reopened"
    COMMITTED = "committed"
    COMPLETED = "completed"


class TypingEngine:
    """
    Word-level input state machine.

    Only mutates the word/input fields of the session; status changes are
    the lifecycle controller's job, so Enter in `waiting` just reports START
    and the last commit reports COMPLETED.
    """

    def __init__(self, session: TestSession):
        self.session = session

    def process_key(self, event: KeyEvent) -> KeyOutcome:
        s = self.session
        key = event.key

        if s.status is TestStatus.WAITING:
            return KeyOutcome.START if key == ENTER else KeyOutcome.IGNORED
        if s.status is not TestStatus.RUNNING:
            return KeyOutcome.IGNORED

        if key == SPACE:
            if not s.current_input:
                # an empty word can't be committed
                return KeyOutcome.IGNORED
            self.commit_current()
            return KeyOutcome.COMPLETED if s.is_last_word_done else KeyOutcome.COMMITTED

        if key == BACKSPACE:
            return self._backspace()

        if event.is_printable and not event.is_chord:
            s.current_input += key
            return KeyOutcome.TYPED

        return KeyOutcome.IGNORED

    def commit_current(self) -> bool:
        s = self.session
        if not s.current_input or s.is_last_word_done:
            return False
        if s.current_input != s.words[s.current_word_index]:
            s.word_errors.add(s.current_word_index)
        s.completed_words.append(s.current_input)
        s.current_word_index += 1
        s.current_input = ""
        return True

    def _backspace(self) -> KeyOutcome:
        s = self.session
        if s.current_input:
            s.current_input = s.current_input[:-1]
            return KeyOutcome.DELETED
        if s.current_word_index == 0:
            return KeyOutcome.IGNORED
        s.current_word_index -= 1
        s.current_input = s.completed_words.pop()
        s.word_errors.discard(s.current_word_index)
        return KeyOutcome.REOPENED
