from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DocumentLineage:
    """
    Digests tying a signed artifact to its source.
      - original_digest: set once at ingestion, never changed afterwards
      - signed_digest: digest of the latest signed artifact (None until first signing)
    """
    original_digest: str
    signed_digest: Optional[str] = None
