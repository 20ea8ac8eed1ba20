"""
log_entry.py

Dataclass für einen Audit-Logeintrag.

• from_dict()  – baut das Objekt aus einem DB-/JSON-Dict
• as_dict()    – Dict mit timestamp_utc (ISO-UTC) für Export/Tests
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class LogEntry:
    id: Optional[int]
    timestamp: datetime          # immer UTC
    log_level: str
    feature: str
    event: str
    reference_id: Optional[str]
    message: Optional[str]

    # -------------------- Factory ------------------------------------ #
    @classmethod
    def from_dict(cls, data: dict) -> "LogEntry":
        """Erzeugt ein LogEntry aus einem DB/JSON-Dict."""
        ts = data["timestamp"]
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts)
        return cls(
            id=data.get("id"),
            timestamp=ts,
            log_level=data.get("log_level", "INFO"),
            feature=data.get("feature", ""),
            event=data.get("event", ""),
            reference_id=data.get("reference_id"),
            message=data.get("message"),
        )

    # -------------------- Dict für Export ---------------------------- #
    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp_utc": self.timestamp.replace(microsecond=0).isoformat(),
            "log_level": self.log_level,
            "feature": self.feature,
            "event": self.event,
            "reference_id": self.reference_id,
            "message": self.message,
        }
