# src/interviewprep_router/sessions/store.py

from __future__ import annotations

import os
import sqlite3
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional


# Default DB file, relative to the working directory (CHAT_DB_PATH overrides)
DB_FILENAME = "chat_sessions.db"


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS chat_sessions (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    title TEXT,
    category TEXT NOT NULL DEFAULT 'general',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    last_activity TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS chat_messages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    session_id TEXT NOT NULL REFERENCES chat_sessions (id),
    role TEXT NOT NULL,
    content TEXT NOT NULL,
    provider TEXT,
    model TEXT,
    tokens INTEGER,
    cost_usd REAL,
    response_time_ms INTEGER,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_chat_messages_session_id
    ON chat_messages (session_id, id);
"""

_MESSAGE_META = ("provider", "model", "tokens", "cost_usd", "response_time_ms")


class ChatSessionStore:
    """
    SQLite-backed chat history.

    - create_session(user_id, title, category)
    - get_session(session_id)
    - add_message(session_id, role, content, **metadata)
    - get_messages(session_id, limit)
    """

    def __init__(self, db_path: Optional[Path | str] = None) -> None:
        env_path = os.getenv("CHAT_DB_PATH")
        self.db_path = Path(db_path or env_path or Path.cwd() / DB_FILENAME)
        self._ensure_schema()

    def _conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        conn = self._conn()
        try:
            conn.executescript(SCHEMA_SQL)
            conn.commit()
        finally:
            conn.close()

    # --- Public API ---------------------------------------------------------

    def create_session(
        self,
        user_id: str,
        title: Optional[str] = None,
        category: str = "general",
    ) -> Dict[str, Any]:
        session_id = uuid.uuid4().hex
        conn = self._conn()
        try:
            conn.execute(
                """
                INSERT INTO chat_sessions (id, user_id, title, category)
                VALUES (?, ?, ?, ?)
                """,
                (session_id, user_id, title or "New chat", category),
            )
            conn.commit()
        finally:
            conn.close()
        session = self.get_session(session_id)
        if session is None:
            raise RuntimeError(f"Chat session {session_id} was not persisted")
        return session

    def get_session(self, session_id: str, with_messages: bool = False) -> Optional[Dict[str, Any]]:
        conn = self._conn()
        try:
            row = conn.execute(
                """
                SELECT id, user_id, title, category, created_at, last_activity
                FROM chat_sessions
                WHERE id = ?
                """,
                (session_id,),
            ).fetchone()
        finally:
            conn.close()

        if row is None:
            return None
        session = dict(row)
        if with_messages:
            session["messages"] = self.get_messages(session_id)
        return session

    def add_message(
        self,
        session_id: str,
        role: str,
        content: str,
        **metadata: Any,
    ) -> int:
        """
        Append a message and bump the session's last_activity.
        Recognised metadata: provider, model, tokens, cost_usd, response_time_ms.
        """
        meta = [metadata.get(k) for k in _MESSAGE_META]
        conn = self._conn()
        try:
            cur = conn.execute(
                """
                INSERT INTO chat_messages
                    (session_id, role, content, provider, model, tokens, cost_usd, response_time_ms)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (session_id, role, content, *meta),
            )
            conn.execute(
                "UPDATE chat_sessions SET last_activity = CURRENT_TIMESTAMP WHERE id = ?",
                (session_id,),
            )
            conn.commit()
            return int(cur.lastrowid)
        finally:
            conn.close()

    def get_messages(self, session_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Messages for a session in chronological order.
        With `limit`, only the most recent `limit` messages are returned.
        """
        sql = """
            SELECT id, role, content, provider, model, tokens, cost_usd,
                   response_time_ms, created_at
            FROM chat_messages
            WHERE session_id = ?
            ORDER BY id DESC
        """
        params: tuple = (session_id,)
        if limit is not None:
            sql += " LIMIT ?"
            params = (session_id, limit)

        conn = self._conn()
        try:
            rows = conn.execute(sql, params).fetchall()
        finally:
            conn.close()

        # reverse so oldest is first
        return [dict(r) for r in reversed(rows)]
