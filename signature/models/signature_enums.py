# signature/models/signature_enums.py
from __future__ import annotations
from enum import Enum


class ImageKind(str, Enum):
    """Raster encodings accepted for the overlay image."""
    PNG = "png"
    JPEG = "jpeg"


class SigningState(str, Enum):
    """Stages a document passes through during one signing request."""
    LOADED = "loaded"
    VALIDATED = "validated"
    OVERLAID = "overlaid"
    SERIALIZED = "serialized"
    HASHED = "hashed"
    DONE = "done"
