"""Repository configuration."""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path


@dataclass
class RepoConfig:
    """Configuration for documents repository."""

    db_path: Path
    """Path to SQLite database file"""

    id_prefix: str = "DOC"
    """Prefix for document IDs (e.g., "DOC" → "DOC-2024-0001")"""

    id_pattern: str = "{YYYY}-{seq:04d}"
    """Pattern for ID generation (supports {YYYY}, {seq:04d})"""
