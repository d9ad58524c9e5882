# app/config.py
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


APP_NAME = "Typemaster"

# Test timing
DEFAULT_TIME_LIMIT_SECONDS = _parse_int_env("TYPEMASTER_TIME_LIMIT", 60)
TIME_LIMIT_CHOICES = (15, 30, 60, 120)
TICK_INTERVAL_MS = 1000

# Scoring
CHARS_PER_WORD = 5
MAX_SUBMITTED_WPM = 400

# Submission metadata defaults
DEFAULT_TEST_TYPE = "practice"
DEFAULT_DIFFICULTY = "Medium"

# Storage
DATA_DIR = Path(os.environ.get("TYPEMASTER_DATA_DIR", Path.cwd() / "data"))
DB_PATH = DATA_DIR / "results.db"
DEFAULT_TEXT_FILE = Path("assets/texts/default.txt")

# Logging
LOG_FILE = "app.log"
LOG_LEVEL = os.environ.get("TYPEMASTER_LOG_LEVEL", "INFO").upper()
