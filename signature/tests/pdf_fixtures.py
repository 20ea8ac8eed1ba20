"""Small in-memory PDFs and images for the signing tests."""
from __future__ import annotations

import base64
from io import BytesIO
from typing import Any, List, Sequence, Tuple

from PIL import Image
from reportlab.pdfgen import canvas

from signature.adapters.document_backend import DocumentBackend
from signature.models.image_asset import ImageAsset
from signature.models.outline_style import OutlineStyle
from signature.models.placement_rect import PlacementRect


def make_pdf(page_sizes: Sequence[Tuple[float, float]] = ((600.0, 800.0),)) -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf)
    for i, size in enumerate(page_sizes):
        c.setPageSize(size)
        c.drawString(20, 20, f"page {i + 1}")
        c.showPage()
    c.save()
    return buf.getvalue()


def image_bytes(size: Tuple[int, int] = (40, 20), fmt: str = "PNG") -> bytes:
    mode = "RGBA" if fmt == "PNG" else "RGB"
    fill = (10, 20, 200, 255) if mode == "RGBA" else (10, 20, 200)
    buf = BytesIO()
    Image.new(mode, size, fill).save(buf, format=fmt)
    return buf.getvalue()


def data_uri(raw: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"


def png_payload(size: Tuple[int, int] = (40, 20)) -> str:
    return data_uri(image_bytes(size, "PNG"), "image/png")


def jpeg_payload(size: Tuple[int, int] = (40, 20)) -> str:
    return data_uri(image_bytes(size, "JPEG"), "image/jpeg")


def mpo_bytes(size: Tuple[int, int] = (40, 20)) -> bytes:
    """Two-frame MPO: a JPEG stream carrying multi-picture APP2 data."""
    first = Image.new("RGB", size, (10, 20, 200))
    second = Image.new("RGB", size, (200, 20, 10))
    buf = BytesIO()
    first.save(buf, format="MPO", save_all=True, append_images=[second])
    return buf.getvalue()


class RecordingBackend(DocumentBackend):
    """In-memory backend that records draw calls instead of touching a PDF."""

    def __init__(self, page_sizes: Sequence[Tuple[float, float]] = ((600.0, 800.0),),
                 *, fail_serialize: bool = False, fail_load: bool = False) -> None:
        self.page_sizes = list(page_sizes)
        self.fail_serialize = fail_serialize
        self.fail_load = fail_load
        self.draws: List[Tuple[int, PlacementRect]] = []
        self.outlines: List[Tuple[int, PlacementRect]] = []

    def load(self, data: bytes) -> Any:
        if self.fail_load:
            raise ValueError("not a document")
        return {"data": data}

    def pages(self, handle: Any) -> Sequence[Any]:
        return list(range(len(self.page_sizes)))

    def page_width(self, page: Any) -> float:
        return self.page_sizes[page][0]

    def page_height(self, page: Any) -> float:
        return self.page_sizes[page][1]

    def embed_image(self, handle: Any, asset: ImageAsset) -> Any:
        return asset

    def draw_image(self, page: Any, image: Any, rect: PlacementRect) -> None:
        self.draws.append((page, rect))

    def draw_outline(self, page: Any, rect: PlacementRect, style: OutlineStyle) -> None:
        self.outlines.append((page, rect))

    def serialize(self, handle: Any) -> bytes:
        if self.fail_serialize:
            raise IOError("disk full")
        return handle["data"] + repr(self.draws).encode("utf-8")
