from __future__ import annotations

import os
import sqlite3
import threading
from datetime import datetime, timezone

from app.core.config import settings
from app.schemas.resume import ResumeDocument

_conn: sqlite3.Connection | None = None
_conn_lock = threading.Lock()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _get_connection() -> sqlite3.Connection:
    global _conn
    with _conn_lock:
        if _conn is not None:
            return _conn

        db_path = settings.resume_store_db_path
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        _conn = sqlite3.connect(
            db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        _conn.execute("PRAGMA journal_mode=WAL;")
        _conn.execute("PRAGMA synchronous=NORMAL;")
        _conn.execute("PRAGMA busy_timeout=5000;")
        _conn.execute(
            """
            CREATE TABLE IF NOT EXISTS resumes (
                user_id TEXT PRIMARY KEY,
                document_json TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )
        return _conn


def save_resume(user_id: str, document: ResumeDocument) -> None:
    conn = _get_connection()
    payload_json = document.model_dump_json(by_alias=True)
    with _conn_lock:
        conn.execute(
            """
            INSERT INTO resumes (user_id, document_json, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                document_json = excluded.document_json,
                updated_at = excluded.updated_at
            """,
            (user_id, payload_json, _utc_now().isoformat()),
        )


def load_resume(user_id: str) -> ResumeDocument | None:
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute("SELECT document_json FROM resumes WHERE user_id = ?", (user_id,))
        row = cur.fetchone()

    if not row:
        return None
    return ResumeDocument.model_validate_json(row[0])


def delete_resume(user_id: str) -> bool:
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute("DELETE FROM resumes WHERE user_id = ?", (user_id,))
        return cur.rowcount > 0


def clear_resumes() -> None:
    conn = _get_connection()
    with _conn_lock:
        conn.execute("DELETE FROM resumes")


class SQLiteResumeStore:
    """Module-level store functions bound to the ResumeStore contract."""

    def load_resume(self, user_id: str) -> ResumeDocument | None:
        return load_resume(user_id)

    def save_resume(self, user_id: str, document: ResumeDocument) -> None:
        save_resume(user_id, document)

    def delete_resume(self, user_id: str) -> bool:
        return delete_resume(user_id)
