# signature/logic/signature_service.py
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from core.common.keyed_lock import KeyedLock
from documents.models.document_record import DocumentRecord
from documents.repository.repo_config import RepoConfig
from documents.repository.sqlite_document_repository import SQLiteDocumentRepository

from ..exceptions.errors import DocumentLoadError, SigningError
from ..models.document_lineage import DocumentLineage
from ..models.signing_result import SigningResult
from .content_hasher import digest
from .overlay_orchestrator import BoxLike, OverlayOrchestrator

_FEATURE_ID = "Signature"

log = logging.getLogger(__name__)


class SignatureService:
    """
    Upload / sign / download on top of the document store.

    Signing always starts from the stored original, so a new signature
    replaces the previous signed artifact instead of stacking on it. The
    signed slot is written only after the whole overlay run succeeded, and
    at most one signing runs per document id at a time.
    """

    # -------- Construction ---------------------------------------------------
    def __init__(self, *, repository: Optional[SQLiteDocumentRepository] = None,
                 orchestrator: Optional[OverlayOrchestrator] = None,
                 logger: Optional[Any] = None,
                 locks: Optional[KeyedLock] = None) -> None:
        if repository is None:
            from core.config.config_service import config_service  # lazy
            repository = SQLiteDocumentRepository(RepoConfig(db_path=config_service.database.documents))
        self._repo = repository
        self._orchestrator = orchestrator or OverlayOrchestrator()
        self._logger = logger
        self._locks = locks if locks is not None else KeyedLock()

    # -------- Internal helpers ----------------------------------------------
    def _audit(self, event: str, *, reference_id: Optional[str] = None,
               message: Optional[str] = None, level: str = "INFO") -> None:
        """Write an audit entry; a broken audit sink never fails the request."""
        audit = self._logger
        if audit is None:
            from core.audit_logging.logic.audit_logger import get_audit_logger  # lazy
            audit = self._logger = get_audit_logger()
        try:
            audit.log(_FEATURE_ID, event, level=level, reference_id=reference_id, message=message)
        except Exception as ex:
            log.warning("Audit log failed for %s/%s: %s", event, reference_id, ex)

    @staticmethod
    def lineage_of(record: DocumentRecord) -> DocumentLineage:
        return DocumentLineage(original_digest=record.original_digest, signed_digest=record.signed_digest)

    # -------- Ingestion -----------------------------------------------------
    def upload(self, document_bytes: bytes, filename: str = "document.pdf") -> DocumentRecord:
        """
        Store a new original document. Its digest is computed here, once.
        """
        if not isinstance(document_bytes, (bytes, bytearray)):
            raise DocumentLoadError("Document must be bytes")
        page_count = self._orchestrator.page_count(document_bytes)
        record = self._repo.add_original(
            data=bytes(document_bytes),
            filename=filename or "document.pdf",
            original_digest=digest(document_bytes),
            page_count=page_count,
        )
        self._audit("DocumentUploaded", reference_id=record.doc_id,
                    message=f"{record.filename} pages={page_count} sha256={record.original_digest}")
        return record

    # -------- Signing --------------------------------------------------------
    def sign(self, doc_id: str, image_payload: str, box: BoxLike,
             page_numbers: Optional[Iterable[int]] = None, *,
             debug: Optional[bool] = None) -> SigningResult:
        """
        Stamp the image onto the stored original and replace the signed slot.
        """
        with self._locks.hold(doc_id):
            record = self._repo.get(doc_id)
            original = self._repo.load_original(doc_id)
            pages = list(page_numbers) if page_numbers is not None else None

            self._audit("SignStart", reference_id=doc_id, message=f"pages={pages or [1]}")
            try:
                result = self._orchestrator.sign_document(
                    original, image_payload, box, pages,
                    lineage=self.lineage_of(record), debug=debug,
                )
                self._repo.replace_signed(doc_id, data=result.signed_bytes, signed_digest=result.signed_digest)
            except SigningError as ex:
                self._audit("SignFailed", reference_id=doc_id, level="ERROR",
                            message=f"{ex.kind}: {ex.message}")
                raise
            except Exception as ex:
                self._audit("SignFailed", reference_id=doc_id, level="ERROR",
                            message=f"{type(ex).__name__}: {ex}")
                raise

            self._audit("SignSuccess", reference_id=doc_id,
                        message=f"applied={[i + 1 for i in result.applied_pages]} sha256={result.signed_digest}")
            return result

    # -------- Retrieval ------------------------------------------------------
    def get_record(self, doc_id: str) -> DocumentRecord:
        return self._repo.get(doc_id)

    def download(self, doc_id: str) -> bytes:
        """Signed artifact if there is one, else the original."""
        signed = self._repo.load_signed(doc_id)
        if signed is not None:
            return signed
        return self._repo.load_original(doc_id)
