"""SQLite implementation of the document store.

Holds the original artifact (written once) and a single signed-artifact
slot per document that every signing replaces.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import List, Optional

from core.common.db_interface import SQLiteRepository
from documents.exceptions.errors import DocumentNotFoundError
from documents.logic.id_generator import IdGenerator
from documents.models.document_record import DocumentRecord
from documents.repository.repo_config import RepoConfig

logger = logging.getLogger(__name__)

_RECORD_COLUMNS = (
    "doc_id, filename, original_digest, page_count, created_at, signed_digest, signed_at"
)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteDocumentRepository(SQLiteRepository):
    """SQLite backend for documents.

    All statements run under one lock on a shared connection; every write
    is a single transaction.
    """

    def __init__(self, config: RepoConfig) -> None:
        super().__init__(config.db_path, check_same_thread=False)
        self._cfg = config
        self._lock = threading.RLock()
        self._ensure_schema()
        self._id_gen = IdGenerator(self.connect(), config.id_prefix, config.id_pattern)

    # =========================================================================
    # Schema Management
    # =========================================================================

    def _ensure_schema(self) -> None:
        with self._lock:
            conn = self.connect()
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    doc_id TEXT PRIMARY KEY,
                    filename TEXT NOT NULL,
                    original_digest TEXT NOT NULL,
                    original_data BLOB NOT NULL,
                    page_count INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    signed_digest TEXT,
                    signed_data BLOB,
                    signed_at TEXT
                );
                """
            )
            conn.commit()

    # =========================================================================
    # Writes
    # =========================================================================

    def add_original(self, *, data: bytes, filename: str, original_digest: str,
                     page_count: int = 0) -> DocumentRecord:
        """Store a freshly ingested document and return its record."""
        with self._lock:
            conn = self.connect()
            with conn:
                doc_id = self._id_gen.next_id()
                conn.execute(
                    """
                    INSERT INTO documents
                        (doc_id, filename, original_digest, original_data, page_count, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (doc_id, filename, original_digest, bytes(data), int(page_count), _utc_now()),
                )
            logger.info("Stored original %s (%s, %d bytes)", doc_id, filename, len(data))
            return self.get(doc_id)

    def replace_signed(self, doc_id: str, *, data: bytes, signed_digest: str) -> DocumentRecord:
        """Atomically overwrite the signed slot (bytes, digest and timestamp)."""
        with self._lock:
            conn = self.connect()
            with conn:
                cur = conn.execute(
                    "UPDATE documents SET signed_data = ?, signed_digest = ?, signed_at = ? WHERE doc_id = ?",
                    (bytes(data), signed_digest, _utc_now(), doc_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(doc_id)
            logger.info("Replaced signed artifact of %s", doc_id)
            return self.get(doc_id)

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, doc_id: str) -> DocumentRecord:
        row = self._fetchone(f"SELECT {_RECORD_COLUMNS} FROM documents WHERE doc_id = ?", (doc_id,))
        if row is None:
            raise DocumentNotFoundError(doc_id)
        return DocumentRecord.from_row(row)

    def exists(self, doc_id: str) -> bool:
        return self._fetchone("SELECT 1 AS x FROM documents WHERE doc_id = ?", (doc_id,)) is not None

    def list_records(self, limit: int = 100, offset: int = 0) -> List[DocumentRecord]:
        with self._lock:
            rows = self.connect().execute(
                f"SELECT {_RECORD_COLUMNS} FROM documents ORDER BY created_at DESC, doc_id DESC LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
        return [DocumentRecord.from_row(dict(r)) for r in rows]

    def load_original(self, doc_id: str) -> bytes:
        row = self._fetchone("SELECT original_data FROM documents WHERE doc_id = ?", (doc_id,))
        if row is None:
            raise DocumentNotFoundError(doc_id)
        return bytes(row["original_data"])

    def load_signed(self, doc_id: str) -> Optional[bytes]:
        row = self._fetchone("SELECT signed_data FROM documents WHERE doc_id = ?", (doc_id,))
        if row is None:
            raise DocumentNotFoundError(doc_id)
        data = row["signed_data"]
        return bytes(data) if data is not None else None

    def _fetchone(self, query: str, params: tuple = ()) -> Optional[dict]:
        with self._lock:
            row = self.connect().execute(query, params).fetchone()
        return dict(row) if row else None
