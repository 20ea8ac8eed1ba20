# signature/logic/overlay_orchestrator.py
"""
Single entry point for stamping an image onto a stored PDF.

One call walks the document through
``LOADED -> VALIDATED -> OVERLAID -> SERIALIZED -> HASHED -> DONE``.
Any failure aborts the call with a :class:`SigningError`; nothing is
returned (or persisted by callers) for a partial run.
"""
from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Tuple, Union

from core.config.config_service import SigningConfig

from ..adapters.document_backend import DocumentBackend
from ..adapters.pypdf_backend import PypdfDocumentBackend
from ..exceptions.errors import (
    DegenerateBoxError,
    DocumentLoadError,
    InvalidCoordinatesError,
    InvalidImageError,
    SerializationError,
    SigningError,
)
from ..models.document_lineage import DocumentLineage
from ..models.normalized_box import NormalizedBox
from ..models.outline_style import OutlineStyle
from ..models.signature_enums import SigningState
from ..models.signing_result import SigningResult
from .content_hasher import new_lineage, update_lineage
from .geometry import clamp_box
from .image_decoder import decode_image
from .page_applier import apply_to_pages

logger = logging.getLogger(__name__)

BOX_FIELDS = ("x", "y", "width", "height")

BoxLike = Union[NormalizedBox, Mapping]


DEFAULT_OUTLINE_COLOR = "#FF0000"

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def hex_to_rgb(hexstr: str) -> Tuple[int, int, int]:
    """
    Convert hex color (#RRGGBB or #RGB) into an RGB tuple.

    Raises ValueError for anything else.
    """
    s = (hexstr or "#000000").strip().lstrip("#")
    if len(s) not in (3, 6) or not set(s) <= _HEX_DIGITS:
        raise ValueError(f"Invalid hex color: {hexstr!r}")
    if len(s) == 3:
        r = int(s[0] * 2, 16); g = int(s[1] * 2, 16); b = int(s[2] * 2, 16)
    else:
        r = int(s[0:2], 16); g = int(s[2:4], 16); b = int(s[4:6], 16)
    return (r, g, b)


def _outline_color(value: str) -> Tuple[int, int, int]:
    try:
        return hex_to_rgb(value)
    except ValueError:
        logger.warning("Signing.outline_color %r is not a hex color, using %s", value, DEFAULT_OUTLINE_COLOR)
        return hex_to_rgb(DEFAULT_OUTLINE_COLOR)


def outline_style_from_config(cfg: SigningConfig) -> OutlineStyle:
    return OutlineStyle(
        color_rgb=_outline_color(cfg.outline_color),
        line_width=float(cfg.outline_width),
        opacity=float(cfg.outline_opacity),
    )


def validate_box(box: Optional[BoxLike]) -> NormalizedBox:
    """
    Check presence and type of all four fields, then clamp to [0, 1].

    Raises InvalidCoordinatesError for missing/non-numeric fields and
    DegenerateBoxError when width or height is 0 after clamping.
    """
    if box is None:
        raise InvalidCoordinatesError("Missing coordinates")

    values = {}
    for name in BOX_FIELDS:
        if isinstance(box, Mapping):
            if name not in box:
                raise InvalidCoordinatesError(f"Missing coordinate '{name}'")
            v = box[name]
        else:
            v = getattr(box, name, None)
        if isinstance(v, bool) or not isinstance(v, numbers.Real) or math.isnan(float(v)):
            raise InvalidCoordinatesError(f"Coordinate '{name}' must be a number, got {v!r}")
        values[name] = float(v)

    clamped = clamp_box(NormalizedBox(**values))
    if clamped.width <= 0 or clamped.height <= 0:
        raise DegenerateBoxError("Coordinates must have positive width and height")
    return clamped


class OverlayOrchestrator:
    """Loads, stamps, serializes and hashes one document per call."""

    def __init__(self, backend: Optional[DocumentBackend] = None, *,
                 signing_config: Optional[SigningConfig] = None) -> None:
        if signing_config is None:
            from core.config.config_service import config_service  # lazy
            signing_config = config_service.signing
        self._backend = backend or PypdfDocumentBackend()
        self._cfg = signing_config
        self._outline = outline_style_from_config(signing_config)

    @property
    def backend(self) -> DocumentBackend:
        return self._backend

    # ------------------------------------------------------------------ #
    def load(self, document_bytes: bytes) -> Any:
        if not isinstance(document_bytes, (bytes, bytearray)) or not document_bytes:
            raise DocumentLoadError("Document bytes are empty")
        try:
            return self._backend.load(bytes(document_bytes))
        except SigningError:
            raise
        except Exception as ex:
            raise DocumentLoadError(f"Cannot load document: {ex}") from ex

    def page_count(self, document_bytes: bytes) -> int:
        return len(self._backend.pages(self.load(document_bytes)))

    # ------------------------------------------------------------------ #
    def sign_document(
        self,
        document_bytes: bytes,
        image_payload: str,
        box: Optional[BoxLike],
        page_numbers: Optional[Iterable[int]] = None,
        *,
        lineage: Optional[DocumentLineage] = None,
        debug: Optional[bool] = None,
    ) -> SigningResult:
        """
        Stamp the image onto the selected pages and return the new bytes
        together with the updated lineage.

        ``lineage`` is the stored record of *document_bytes*; without it the
        original digest is computed from *document_bytes*.
        """
        handle = self.load(document_bytes)
        state = SigningState.LOADED

        norm = validate_box(box)
        state = self._advance(state, SigningState.VALIDATED)

        asset = decode_image(image_payload)
        try:
            image = self._backend.embed_image(handle, asset)
        except SigningError:
            raise
        except Exception as ex:
            raise InvalidImageError(f"Cannot embed image: {ex}") from ex

        draw_outline = self._cfg.debug_outline if debug is None else bool(debug)
        applied = apply_to_pages(
            self._backend, handle, image, asset.aspect, norm, page_numbers,
            outline=self._outline if draw_outline else None,
        )
        state = self._advance(state, SigningState.OVERLAID)

        try:
            signed = self._backend.serialize(handle)
        except SigningError:
            raise
        except Exception as ex:
            raise SerializationError(f"Cannot serialize signed document: {ex}") from ex
        state = self._advance(state, SigningState.SERIALIZED)

        base = lineage or new_lineage(bytes(document_bytes))
        updated = update_lineage(base, signed)
        state = self._advance(state, SigningState.HASHED)

        self._advance(state, SigningState.DONE)
        logger.info("Signed %d page(s): %s", len(applied), updated.signed_digest)
        return SigningResult(signed_bytes=signed, lineage=updated, applied_pages=tuple(applied))

    @staticmethod
    def _advance(current: SigningState, nxt: SigningState) -> SigningState:
        logger.debug("signing state %s -> %s", current.value, nxt.value)
        return nxt


def sign_document(
    document_bytes: bytes,
    image_payload: str,
    box: Optional[BoxLike],
    page_numbers: Optional[Iterable[int]] = None,
) -> SigningResult:
    """Convenience wrapper using the default backend and configuration."""
    return OverlayOrchestrator().sign_document(document_bytes, image_payload, box, page_numbers)
