from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Set, Tuple

ENTER = "Enter"
SPACE = " "
BACKSPACE = "Backspace"


class TestStatus(str, Enum):
    WAITING = "waiting"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class KeyEvent:
    key: str
    ctrl: bool = False
    alt: bool = False
    meta: bool = False

    @property
    def is_chord(self) -> bool:
        return self.ctrl or self.alt or self.meta

    @property
    def is_printable(self) -> bool:
        return len(self.key) == 1 and self.key.isprintable()


@dataclass
class TestSession:
    words: Tuple[str, ...]
    time_limit_seconds: int
    status: TestStatus = TestStatus.WAITING
    current_word_index: int = 0
    current_input: str = ""
    completed_words: List[str] = field(default_factory=list)
    word_errors: Set[int] = field(default_factory=set)
    time_remaining_seconds: int = -1
    finalizing: bool = False
    wpm_history: List[int] = field(default_factory=list)

    def __post_init__(self):
        self.words = tuple(self.words)
        if self.time_remaining_seconds < 0:
            self.time_remaining_seconds = self.time_limit_seconds

    @property
    def elapsed_seconds(self) -> int:
        return self.time_limit_seconds - self.time_remaining_seconds

    @property
    def is_last_word_done(self) -> bool:
        return self.current_word_index >= len(self.words)

    @property
    def is_active(self) -> bool:
        return self.status in (TestStatus.RUNNING, TestStatus.PAUSED)


@dataclass(frozen=True)
class SessionSnapshot:
    status: TestStatus
    words: Tuple[str, ...]
    current_word_index: int
    current_input: str
    completed_words: Tuple[str, ...]
    word_errors: FrozenSet[int]
    time_limit_seconds: int
    time_remaining_seconds: int
    wpm: int
    accuracy: int
    wpm_history: Tuple[int, ...] = ()
