"""A journal kept in an SQLite database."""

from __future__ import annotations

import logging
import sqlite3
import threading
from datetime import datetime

from quarcc.errors import TradingError
from quarcc.journal import (
    Event,
    Journal,
    LogEntry,
    now,
    string_to_timestamp,
    timestamp_to_string,
)

_log = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS journal (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  timestamp TEXT NOT NULL,
  event_type INTEGER NOT NULL,
  data TEXT NOT NULL,
  correlation_id TEXT,
  UNIQUE(timestamp, correlation_id, event_type)
);

CREATE INDEX IF NOT EXISTS idx_timestamp ON journal(timestamp);
CREATE INDEX IF NOT EXISTS idx_event_type ON journal(event_type);
CREATE INDEX IF NOT EXISTS idx_correlation_id ON journal(correlation_id);
"""

_SELECT = "SELECT id, timestamp, event_type, data, correlation_id FROM journal"


def _to_entry(row: tuple) -> LogEntry:
    entry_id, ts, event_type, data, correlation_id = row
    return LogEntry(
        id=entry_id,
        timestamp=string_to_timestamp(ts),
        event_type=Event(event_type),
        data=data or "",
        correlation_id=correlation_id or "",
    )


class SQLiteJournal(Journal):
    """Journal backed by an SQLite file (or ``":memory:"``).

    Failures to write or read entries are logged, not raised.
    """

    def __init__(self, db_path: str) -> None:
        self._lock = threading.Lock()
        self._closed = False
        try:
            self._conn = sqlite3.connect(
                str(db_path), check_same_thread=False, isolation_level=None
            )
        except sqlite3.Error as exc:
            raise TradingError(f"Failed to open journal database: {exc}") from exc
        try:
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            self._conn.close()
            raise TradingError(f"Failed to create journal schema: {exc}") from exc

    def log(self, event: Event, data: str, correlation_id: str = "") -> None:
        timestamp = timestamp_to_string(now())
        with self._lock:
            try:
                self._conn.execute(
                    "INSERT INTO journal (timestamp, event_type, data, correlation_id) "
                    "VALUES (?, ?, ?, ?)",
                    (timestamp, int(event), data, correlation_id or None),
                )
            except sqlite3.Error as exc:
                _log.error("Failed to insert log: %s", exc)

    def get_history(
        self, start: datetime, end: datetime, event_filter: Event | None = None
    ) -> list[LogEntry]:
        sql = f"{_SELECT} WHERE timestamp BETWEEN ? AND ?"
        params: list = [timestamp_to_string(start), timestamp_to_string(end)]
        if event_filter is not None:
            sql += " AND event_type = ?"
            params.append(int(event_filter))
        sql += " ORDER BY id ASC"
        return self._query(sql, params)

    def get_order_history(self, order_id: str) -> list[LogEntry]:
        return self._query(
            f"{_SELECT} WHERE correlation_id = ? ORDER BY id ASC", [order_id]
        )

    def _query(self, sql: str, params: list) -> list[LogEntry]:
        with self._lock:
            try:
                rows = self._conn.execute(sql, params).fetchall()
            except sqlite3.Error as exc:
                _log.error("Failed to query journal: %s", exc)
                return []
        return [_to_entry(row) for row in rows]

    def _checkpoint(self) -> None:
        try:
            self._conn.execute("PRAGMA wal_checkpoint")
        except sqlite3.Error as exc:
            _log.error("Failed to checkpoint journal: %s", exc)

    def flush(self) -> None:
        with self._lock:
            if not self._closed:
                self._checkpoint()

    def close(self) -> None:
        """Flush and close the database; further calls do nothing."""
        with self._lock:
            if self._closed:
                return
            self._checkpoint()
            self._conn.close()
            self._closed = True

    def __enter__(self) -> SQLiteJournal:
        return self

    def __exit__(self, *args) -> None:
        self.close()