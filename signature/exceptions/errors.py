"""Signing errors.

Every error carries a stable ``kind`` string that callers map to their own
transport-level responses.
"""
from __future__ import annotations


class SigningError(Exception):
    """Base exception for the signing feature."""

    kind = "SigningError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidCoordinatesError(SigningError):
    """Box fields missing, non-numeric or non-positive."""

    kind = "InvalidCoordinates"


class DegenerateBoxError(InvalidCoordinatesError):
    """Target box has zero width or height after clamping."""

    kind = "DegenerateBox"


class InvalidImageError(SigningError):
    """Image payload could not be decoded or embedded."""

    kind = "InvalidImage"


class DocumentLoadError(SigningError):
    """Source bytes are not a loadable document."""

    kind = "DocumentLoadFailed"


class SerializationError(SigningError):
    """Mutated document could not be written back to bytes."""

    kind = "SerializationFailed"
