import math
from dataclasses import dataclass
from typing import List, Sequence

from app.config import CHARS_PER_WORD


@dataclass(frozen=True)
class Metrics:
    wpm: int
    accuracy: int
    error_count: int
    characters_typed: int
    correct_characters: int
    elapsed_seconds: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _finite_or_zero(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def typed_text(completed_words: Sequence[str], current_input: str = "") -> str:
    words = list(completed_words)
    if current_input:
        words.append(current_input)
    return " ".join(words)


def characters_typed(completed_words: Sequence[str], current_input: str = "") -> int:
    """Gross character count: every committed word, the live buffer, and one space between words."""
    return len(typed_text(completed_words, current_input))


def correct_characters(completed_words: Sequence[str], targets: Sequence[str]) -> int:
    correct = 0
    for typed, target in zip(completed_words, targets):
        for a, b in zip(typed, target):
            if a == b:
                correct += 1
    return correct


def gross_wpm(chars: int, elapsed_seconds: float) -> int:
    """
    Gross WPM = (chars / 5) / minutes. Wrong characters count too;
    accuracy is reported separately.
    """
    if elapsed_seconds <= 0 or chars <= 0:
        return 0
    wpm = _finite_or_zero((chars / CHARS_PER_WORD) / (elapsed_seconds / 60.0))
    return max(0, _round_half_up(wpm))


def accuracy(correct: int, typed: int) -> int:
    if typed <= 0:
        return 0
    pct = _finite_or_zero(correct / typed * 100.0)
    return max(0, min(100, _round_half_up(pct)))


def compute_metrics(session) -> Metrics:
    typed = characters_typed(session.completed_words, session.current_input)
    correct = correct_characters(session.completed_words, session.words)
    elapsed = session.elapsed_seconds
    return Metrics(
        wpm=gross_wpm(typed, elapsed),
        accuracy=accuracy(correct, typed),
        error_count=len(session.word_errors),
        characters_typed=typed,
        correct_characters=correct,
        elapsed_seconds=elapsed,
    )


def smooth(values: Sequence[float], factor: float = 0.25) -> List[float]:
    out, last = [], None
    for v in values:
        last = v if last is None else last + factor * (v - last)
        out.append(last)
    return out
