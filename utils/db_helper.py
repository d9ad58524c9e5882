import json
import logging
import sqlite3
from pathlib import Path
from typing import List, Union

from app.config import DB_PATH
from app.errors import SubmissionError
from app.result import Submission, validate_submission

log = logging.getLogger(__name__)


def _ensure_schema(conn):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS results(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        test_id TEXT NOT NULL,
        test_type TEXT NOT NULL,
        difficulty TEXT NOT NULL,
        wpm INTEGER,
        accuracy INTEGER,
        errors INTEGER,
        time_taken INTEGER,
        payload_json TEXT,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)


def get_conn(db_path: Union[str, Path] = DB_PATH):
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    _ensure_schema(conn)
    return conn


def insert_result(submission: Submission, db_path: Union[str, Path] = DB_PATH) -> int:
    problems = validate_submission(submission)
    if problems:
        raise SubmissionError("Validation failed", problems)

    payload = submission.to_payload()
    conn = None
    try:
        conn = get_conn(db_path)
        cur = conn.execute(
            "INSERT INTO results(test_id, test_type, difficulty, wpm, accuracy, errors, time_taken, payload_json)"
            " VALUES (?,?,?,?,?,?,?,?)",
            (
                payload["testId"], payload["testType"], payload["difficulty"],
                payload["wpm"], payload["accuracy"], payload["errors"], payload["timeTaken"],
                json.dumps(payload, ensure_ascii=False),
            ),
        )
        conn.commit()
        return cur.lastrowid
    except sqlite3.Error as e:
        raise SubmissionError(str(e)) from e
    finally:
        if conn is not None:
            conn.close()


def recent_results(limit: int = 20, db_path: Union[str, Path] = DB_PATH) -> List[dict]:
    conn = None
    try:
        conn = get_conn(db_path)
        rows = conn.execute(
            "SELECT payload_json FROM results ORDER BY id DESC LIMIT ?", (limit,)
        ).fetchall()
        return [json.loads(r[0]) for r in rows]
    except sqlite3.Error as e:
        raise SubmissionError(str(e)) from e
    finally:
        if conn is not None:
            conn.close()


class ResultStore:
    """Submission collaborator backed by the local results table."""

    def __init__(self, db_path: Union[str, Path] = DB_PATH):
        self.db_path = Path(db_path)

    def __call__(self, submission: Submission) -> int:
        return self.submit(submission)

    def submit(self, submission: Submission) -> int:
        row_id = insert_result(submission, self.db_path)
        log.info("Stored result %s as row %d", submission.result.test_id, row_id)
        return row_id

    def recent(self, limit: int = 20) -> List[dict]:
        return recent_results(limit, self.db_path)
