# signature/logic/image_decoder.py
"""
Decode the overlay image from a data-URI style payload
(``"data:image/png;base64,<data>"``).

The header only selects the expected encoding: PNG when it contains
``image/png``, JPEG in every other case (including a missing header). The
bytes must really be of that encoding.
"""
from __future__ import annotations

import base64
import binascii
from io import BytesIO
from typing import Tuple

from PIL import Image

from ..exceptions.errors import InvalidImageError
from ..models.image_asset import ImageAsset
from ..models.signature_enums import ImageKind

PNG_MARKER = "image/png"

# MPO is a baseline JPEG stream with multi-picture APP2 data (phone cameras).
_PIL_FORMATS = {ImageKind.PNG: ("PNG",), ImageKind.JPEG: ("JPEG", "MPO")}


def split_payload(payload: str) -> Tuple[str, str]:
    """Return ``(header, base64_data)``; without a comma the whole payload is data."""
    header, sep, data = (payload or "").partition(",")
    if not sep:
        return "", header
    return header, data.split(",", 1)[0]


def detect_kind(header: str) -> ImageKind:
    return ImageKind.PNG if PNG_MARKER in header else ImageKind.JPEG


def _b64decode(data: str) -> bytes:
    data = "".join(data.split())
    data += "=" * (-len(data) % 4)
    try:
        return base64.b64decode(data, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise InvalidImageError("Image payload is not valid base64") from exc


def decode_image(payload: str) -> ImageAsset:
    if not isinstance(payload, str):
        raise InvalidImageError("Image payload must be a string")

    header, data = split_payload(payload)
    kind = detect_kind(header)
    raw = _b64decode(data)
    if not raw:
        raise InvalidImageError("Image payload is empty")

    try:
        with Image.open(BytesIO(raw)) as img:
            fmt = img.format
            width, height = img.size
            img.load()
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise InvalidImageError(f"Cannot decode {kind.value.upper()} image: {exc}") from exc

    if fmt not in _PIL_FORMATS[kind]:
        raise InvalidImageError(f"Expected {_PIL_FORMATS[kind][0]} image data, got {fmt or 'unknown'}")
    if width <= 0 or height <= 0:
        raise InvalidImageError("Image has no pixels")

    return ImageAsset(width=width, height=height, data=raw, kind=kind)
