from typing import Tuple

from app.errors import InvalidInput


def segment_words(text: str) -> Tuple[str, ...]:
    """
    Split a target text into words on single-space boundaries.
    Runs of spaces are not merged; callers hand in text that is already clean.
    """
    if not isinstance(text, str) or text == "":
        raise InvalidInput("target text is empty")
    words = tuple(text.split(" "))
    if not any(words):
        raise InvalidInput("target text contains no words")
    return words


def clean_text(text: str) -> str:
    # collapse newlines/tabs/space runs into single spaces
    return " ".join((text or "").split())
