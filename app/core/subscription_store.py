from __future__ import annotations

import os
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Any

from app.core.config import settings

_conn: sqlite3.Connection | None = None
_conn_lock = threading.Lock()


class SubscriptionQuotaExceeded(Exception):
    pass


def current_period(now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return moment.strftime("%Y-%m")


def _get_connection() -> sqlite3.Connection:
    global _conn
    with _conn_lock:
        if _conn is not None:
            return _conn

        db_path = settings.subscription_db_path
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
            CREATE TABLE IF NOT EXISTS subscriptions (
                user_id TEXT PRIMARY KEY,
                tier TEXT NOT NULL DEFAULT 'free',
                period TEXT NOT NULL,
                job_target_used INTEGER NOT NULL DEFAULT 0
            );
            """
        )
        return _conn


def get_subscription(user_id: str, *, period: str | None = None) -> dict[str, Any]:
    """Tier and usage for ``period``; counters from an older period read as zero."""
    period = period or current_period()
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute(
            "SELECT tier, period, job_target_used FROM subscriptions WHERE user_id = ?",
            (user_id,),
        )
        row = cur.fetchone()

    if not row:
        return {"tier": "free", "period": period, "job_target_used": 0}
    used = int(row[2] or 0) if row[1] == period else 0
    return {"tier": row[0], "period": period, "job_target_used": used}


def set_tier(user_id: str, tier: str) -> None:
    conn = _get_connection()
    with _conn_lock:
        conn.execute(
            """
            INSERT INTO subscriptions (user_id, tier, period, job_target_used)
            VALUES (?, ?, ?, 0)
            ON CONFLICT(user_id) DO UPDATE SET tier = excluded.tier
            """,
            (user_id, tier, current_period()),
        )


def consume_job_target(user_id: str, *, limit: int | None, period: str | None = None) -> int | None:
    """Record one job-target comparison; returns the remaining allowance (None = unlimited)."""
    period = period or current_period()
    conn = _get_connection()

    with _conn_lock:
        cursor = conn.cursor()
        cursor.execute("BEGIN IMMEDIATE")
        try:
            cursor.execute(
                "SELECT period, job_target_used FROM subscriptions WHERE user_id = ?",
                (user_id,),
            )
            row = cursor.fetchone()
            used = int(row[1] or 0) if row and row[0] == period else 0
            if limit is not None and used >= limit:
                conn.rollback()
                raise SubscriptionQuotaExceeded

            cursor.execute(
                """
                INSERT INTO subscriptions (user_id, tier, period, job_target_used)
                VALUES (?, 'free', ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    period = excluded.period,
                    job_target_used = excluded.job_target_used
                """,
                (user_id, period, used + 1),
            )
            conn.commit()
        except SubscriptionQuotaExceeded:
            raise
        except Exception:
            conn.rollback()
            raise

    if limit is None:
        return None
    return max(0, limit - used - 1)


def clear_subscriptions() -> None:
    conn = _get_connection()
    with _conn_lock:
        conn.execute("DELETE FROM subscriptions")
