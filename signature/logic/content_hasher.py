"""SHA-256 content digests and the original/signed lineage."""
from __future__ import annotations

import hashlib
from dataclasses import replace
from typing import Union

from ..models.document_lineage import DocumentLineage


def digest(data: Union[bytes, bytearray, memoryview]) -> str:
    """Hex SHA-256 of exactly *data*."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"digest expects bytes, got {type(data).__name__}")
    return hashlib.sha256(data).hexdigest()


def new_lineage(original_bytes: bytes) -> DocumentLineage:
    return DocumentLineage(original_digest=digest(original_bytes))


def update_lineage(lineage: DocumentLineage, signed_bytes: bytes) -> DocumentLineage:
    """Replace the signed digest; the original digest is never touched."""
    return replace(lineage, signed_digest=digest(signed_bytes))
