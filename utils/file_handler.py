import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from app.config import DEFAULT_TEXT_FILE
from app.errors import InvalidInput
from app.validation import clean_text, segment_words

log = logging.getLogger(__name__)

_FALLBACK = (
    "Welcome to Typemaster. Press enter to start the clock, then type each word "
    "and press space to move on. Mistakes stay visible until you fix them, and "
    "your speed and accuracy update every second."
)


@dataclass(frozen=True)
class TextSource:
    words: Tuple[str, ...]
    recommended_time_limit_seconds: Optional[int] = None


def text_source_from_string(text: str, time_limit: Optional[int] = None) -> TextSource:
    return TextSource(words=segment_words(clean_text(text)), recommended_time_limit_seconds=time_limit)


def load_text_source(path: Union[str, Path]) -> TextSource:
    """
    Load a practice text from disk.
    `.json` files hold {"text": "..."} or {"words": [...]} and an optional "timeLimit";
    anything else is read as plain text.
    """
    p = Path(path)
    raw = p.read_text(encoding="utf-8", errors="ignore")
    if p.suffix.lower() != ".json":
        return text_source_from_string(raw)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidInput(f"{p.name}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidInput(f"{p.name}: expected a JSON object")

    limit = data.get("timeLimit")
    if limit is not None:
        try:
            limit = int(limit)
        except (TypeError, ValueError):
            log.warning("Ignoring bad timeLimit %r in %s", limit, p.name)
            limit = None

    if "words" in data:
        text = " ".join(str(w) for w in data["words"])
    else:
        text = str(data.get("text", ""))
    return text_source_from_string(text, time_limit=limit)


def load_default_text() -> TextSource:
    try:
        if DEFAULT_TEXT_FILE.exists():
            return load_text_source(DEFAULT_TEXT_FILE)
    except (OSError, InvalidInput) as e:
        log.warning("Failed to load %s: %s", DEFAULT_TEXT_FILE, e)
    return text_source_from_string(_FALLBACK)
