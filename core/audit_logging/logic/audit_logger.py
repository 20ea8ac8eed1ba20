"""
core/audit_logging/logic/audit_logger.py
========================================

Thread-sicherer Audit-Logger mit SQLite-Backend.

Eine prozessweite Instanz liefert :func:`get_audit_logger`; Tests und
Services können eigene Instanzen mit separatem ``db_path`` erzeugen.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from core.common.db_interface import SQLiteRepository
from core.audit_logging.models.log_entry import LogEntry


class AuditLogger(SQLiteRepository):
    """Persists audit events (feature/event/reference) into a ``logs`` table."""

    def __init__(self, db_path: Path) -> None:
        super().__init__(db_path, check_same_thread=False)
        self._lock = threading.Lock()
        self._ensure_db()

    # ------------------------------------------------------------------ #
    #  Öffentliche API: log                                              #
    # ------------------------------------------------------------------ #
    def log(
        self,
        feature: str,
        event: str,
        *,
        level: str = "INFO",
        reference_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """Persistiert einen Logeintrag (Zeitstempel in UTC)."""
        entry = LogEntry(
            id=None,
            timestamp=datetime.now(timezone.utc),
            log_level=level,
            feature=feature,
            event=event,
            reference_id=reference_id,
            message=message,
        )
        self._insert_log(entry)

    # ------------------------------------------------------------------ #
    #  Fetch / Query / Clear                                             #
    # ------------------------------------------------------------------ #
    def fetch_logs(self, limit: int = 100) -> List[LogEntry]:
        with self._lock:
            rows = self.connect().execute(
                "SELECT * FROM logs ORDER BY id DESC LIMIT ?", (limit,)
            ).fetchall()
            return [LogEntry.from_dict(dict(row)) for row in rows]

    def query_logs(
        self,
        *,
        feature: Optional[str] = None,
        event: Optional[str] = None,
        reference_id: Optional[str] = None,
        level: Optional[str] = None,
        limit: int = 1_000,
    ) -> List[LogEntry]:
        with self._lock:
            query = "SELECT * FROM logs WHERE 1=1"
            params: list[object] = []

            if feature is not None:
                query += " AND feature = ?"
                params.append(feature)
            if event is not None:
                query += " AND event = ?"
                params.append(event)
            if reference_id is not None:
                query += " AND reference_id = ?"
                params.append(reference_id)
            if level is not None:
                query += " AND log_level = ?"
                params.append(level)

            query += " ORDER BY id DESC LIMIT ?"
            params.append(limit)

            rows = self.connect().execute(query, params).fetchall()
            return [LogEntry.from_dict(dict(row)) for row in rows]

    def clear_logs(self) -> None:
        with self._lock:
            conn = self.connect()
            conn.execute("DELETE FROM logs")
            conn.commit()

    # ------------------------------------------------------------------ #
    #  Interne Helfer                                                    #
    # ------------------------------------------------------------------ #
    def _ensure_db(self) -> None:
        with self._lock:
            conn = self.connect()
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    feature TEXT NOT NULL,
                    event TEXT NOT NULL,
                    reference_id TEXT,
                    message TEXT,
                    log_level TEXT NOT NULL DEFAULT 'INFO'
                )
                """
            )
            conn.commit()

    def _insert_log(self, entry: LogEntry) -> None:
        with self._lock:
            conn = self.connect()
            conn.execute(
                """
                INSERT INTO logs
                    (timestamp, feature, event, reference_id, message, log_level)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.timestamp.isoformat(),
                    entry.feature,
                    entry.event,
                    entry.reference_id,
                    entry.message,
                    entry.log_level,
                ),
            )
            conn.commit()


# --------------------------------------------------------------------------- #
#  Prozessweite Instanz (lazy)                                                #
# --------------------------------------------------------------------------- #
_instance: Optional[AuditLogger] = None
_instance_lock = threading.Lock()


def get_audit_logger() -> AuditLogger:
    """Return the shared logger, opening ``Database.logging`` on first use."""
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                from core.config.config_service import config_service  # lazy
                _instance = AuditLogger(config_service.database.logging)
    return _instance
