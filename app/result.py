# app/result.py
from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app.calculation import Metrics, typed_text
from app.config import DEFAULT_DIFFICULTY, DEFAULT_TEST_TYPE, MAX_SUBMITTED_WPM

_ID_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class TestResult:
    wpm: int
    accuracy: int
    error_count: int
    time_taken_seconds: int
    characters_typed: int
    test_id: str


@dataclass(frozen=True)
class TestMetadata:
    """Caller-supplied tags forwarded untouched to the submission collaborator."""

    test_id: Optional[str] = None
    test_type: str = DEFAULT_TEST_TYPE
    difficulty: str = DEFAULT_DIFFICULTY


@dataclass(frozen=True)
class Submission:
    result: TestResult
    metadata: TestMetadata
    text_length: int
    user_input: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "wpm": self.result.wpm,
            "accuracy": self.result.accuracy,
            "errors": self.result.error_count,
            "timeTaken": self.result.time_taken_seconds,
            "textLength": self.text_length,
            "userInput": self.user_input,
            "testType": self.metadata.test_type,
            "difficulty": self.metadata.difficulty,
            "testId": self.result.test_id,
        }


def generate_test_id(now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(9))
    return f"practice_{now_ms}_{suffix}"


def assemble_result(session, metrics: Metrics, metadata: Optional[TestMetadata] = None) -> Submission:
    metadata = metadata or TestMetadata()
    result = TestResult(
        wpm=metrics.wpm,
        accuracy=metrics.accuracy,
        error_count=metrics.error_count,
        time_taken_seconds=max(0, metrics.elapsed_seconds),
        characters_typed=metrics.characters_typed,
        test_id=metadata.test_id or generate_test_id(),
    )
    return Submission(
        result=result,
        metadata=metadata,
        text_length=len(" ".join(session.words)),
        user_input=typed_text(session.completed_words, session.current_input),
    )


def validate_submission(submission: Submission) -> List[str]:
    """Returns human-readable problems; an empty list means the payload is acceptable."""
    r = submission.result
    problems: List[str] = []
    if not 0 <= r.wpm <= MAX_SUBMITTED_WPM:
        problems.append(f"WPM must be a valid number between 0 and {MAX_SUBMITTED_WPM}")
    if not 0 <= r.accuracy <= 100:
        problems.append("Accuracy must be a valid number between 0 and 100")
    if r.error_count < 0:
        problems.append("Errors must be a valid non-negative number")
    if r.time_taken_seconds < 0:
        problems.append("Time taken must be a valid non-negative number")
    if submission.text_length <= 0:
        problems.append("Text length must be a valid positive number")
    if not submission.metadata.test_type:
        problems.append("Test type is required")
    if not submission.metadata.difficulty:
        problems.append("Difficulty is required")
    if not r.test_id:
        problems.append("Test ID is required")
    return problems
