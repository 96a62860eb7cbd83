from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from typing import Optional

from .state import GameSession


def _debug(msg: str) -> None:
    if os.getenv('TILEMERGE_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on'):
        print(f"[db] {msg}")


def _ensure_db_dir(db_path: str) -> None:
    """Ensures the directory for the SQLite DB exists before connecting."""
    directory = os.path.dirname(db_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def _resolve_db_path(db_path: str) -> str:
    """Resolves a potentially unwritable DB path to a writable one, creating the directory if needed."""
    try:
        _ensure_db_dir(db_path)
        return db_path
    except PermissionError:
        _debug(f"cannot create directory for {db_path}")
    candidates = [
        os.getenv('TILEMERGE_DB_DIR'),
        os.path.join(os.getcwd(), 'data'),
        '/tmp',
    ]
    base = os.path.basename(db_path) or 'sessions.db'
    for d in candidates:
        if not d:
            continue
        try:
            os.makedirs(d, exist_ok=True)
        except OSError:
            _debug(f"skipping unwritable directory {d}")
            continue
        _debug(f"using {os.path.join(d, base)}")
        return os.path.join(d, base)
    return base


def _ensure_db(conn: sqlite3.Connection) -> None:
    """Ensures the table for saved sessions exists."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS sessions (
            key TEXT PRIMARY KEY,
            row_count INTEGER NOT NULL,
            column_count INTEGER NOT NULL,
            state TEXT NOT NULL,
            score INTEGER NOT NULL,
            saved_at TEXT NOT NULL
        )
        """
    )
    conn.commit()


def _connect(db_path: str) -> sqlite3.Connection:
    resolved = _resolve_db_path(db_path)
    _ensure_db_dir(resolved)
    conn = sqlite3.connect(resolved)
    _ensure_db(conn)
    return conn


def db_store_session(db_path: str, key: str, session: GameSession) -> None:
    """Saves (or replaces) the session stored under key."""
    conn = _connect(db_path)
    try:
        conn.execute(
            """
            INSERT OR REPLACE INTO sessions (key, row_count, column_count, state, score, saved_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                key,
                session.board.row_count,
                session.board.column_count,
                session.to_json(),
                int(session.score),
                datetime.now(timezone.utc).isoformat(timespec='seconds'),
            ),
        )
        conn.commit()
    finally:
        conn.close()


def db_lookup_session(db_path: str, key: str, seed: Optional[int] = None) -> Optional[GameSession]:
    """Loads the session stored under key, or None if there is none."""
    conn = _connect(db_path)
    try:
        row = conn.execute("SELECT state FROM sessions WHERE key = ?", (key,)).fetchone()
    finally:
        conn.close()
    if not row:
        return None
    return GameSession.from_json(row[0], seed=seed)


def db_delete_session(db_path: str, key: str) -> bool:
    conn = _connect(db_path)
    try:
        cur = conn.execute("DELETE FROM sessions WHERE key = ?", (key,))
        conn.commit()
        return cur.rowcount > 0
    finally:
        conn.close()
