"""Documents feature exceptions."""
from __future__ import annotations


class DocumentsError(Exception):
    """Base exception for documents feature."""


class DocumentNotFoundError(DocumentsError):
    """Raised when no record exists for a document id."""

    def __init__(self, doc_id: str) -> None:
        super().__init__(f"Document not found: {doc_id}")
        self.doc_id = doc_id
