from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from .document_lineage import DocumentLineage


@dataclass(frozen=True)
class SigningResult:
    signed_bytes: bytes = field(repr=False)
    lineage: DocumentLineage
    applied_pages: Tuple[int, ...] = ()  # 0-based indices actually drawn on

    @property
    def original_digest(self) -> str:
        return self.lineage.original_digest

    @property
    def signed_digest(self) -> str:
        return self.lineage.signed_digest or ""
