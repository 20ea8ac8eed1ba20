"""Stored document metadata (bytes are loaded separately)."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class DocumentRecord:
    doc_id: str
    filename: str
    original_digest: str
    page_count: int
    created_at: datetime
    signed_digest: Optional[str] = None
    signed_at: Optional[datetime] = None

    @property
    def is_signed(self) -> bool:
        return self.signed_digest is not None

    @classmethod
    def from_row(cls, row: dict) -> "DocumentRecord":
        signed_at = row.get("signed_at")
        return cls(
            doc_id=row["doc_id"],
            filename=row["filename"],
            original_digest=row["original_digest"],
            page_count=int(row.get("page_count") or 0),
            created_at=datetime.fromisoformat(row["created_at"]),
            signed_digest=row.get("signed_digest"),
            signed_at=datetime.fromisoformat(signed_at) if signed_at else None,
        )
