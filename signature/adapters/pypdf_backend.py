"""pypdf/reportlab implementation of DocumentBackend.

Drawing works by rendering a one-page overlay with reportlab (same size as
the target page) and merging it onto the page with pypdf.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Sequence

from PIL import Image
from pypdf import PdfReader, PdfWriter
from pypdf import PageObject
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from signature.adapters.document_backend import DocumentBackend
from signature.models.image_asset import ImageAsset
from signature.models.outline_style import OutlineStyle
from signature.models.placement_rect import PlacementRect

logger = logging.getLogger(__name__)


@dataclass
class EmbeddedImage:
    """Image prepared for reportlab; PNG alpha is kept (``mask="auto"``)."""
    reader: ImageReader
    asset: ImageAsset


class PypdfDocumentBackend(DocumentBackend):
    """Backend over ``pypdf.PdfWriter`` handles."""

    def load(self, data: bytes) -> PdfWriter:
        reader = PdfReader(BytesIO(data))
        if reader.is_encrypted:
            raise ValueError("Encrypted PDFs are not supported")
        writer = PdfWriter(clone_from=reader)
        logger.debug("Loaded PDF with %d page(s)", len(writer.pages))
        return writer

    def pages(self, handle: PdfWriter) -> Sequence[PageObject]:
        return list(handle.pages)

    def page_width(self, page: PageObject) -> float:
        return float(page.mediabox.width)

    def page_height(self, page: PageObject) -> float:
        return float(page.mediabox.height)

    def embed_image(self, handle: PdfWriter, asset: ImageAsset) -> EmbeddedImage:
        img = Image.open(BytesIO(asset.data))
        img.load()
        if img.mode not in ("RGB", "RGBA"):
            has_alpha = "A" in img.getbands() or "transparency" in img.info
            img = img.convert("RGBA" if has_alpha else "RGB")
        return EmbeddedImage(reader=ImageReader(img), asset=asset)

    def draw_image(self, page: PageObject, image: EmbeddedImage, rect: PlacementRect) -> None:
        def paint(c: canvas.Canvas) -> None:
            c.drawImage(image.reader, rect.x, rect.y, width=rect.width, height=rect.height, mask="auto")

        self._merge_overlay(page, paint)

    def draw_outline(self, page: PageObject, rect: PlacementRect, style: OutlineStyle) -> None:
        r, g, b = style.color_rgb

        def paint(c: canvas.Canvas) -> None:
            c.setStrokeColorRGB(r / 255.0, g / 255.0, b / 255.0)
            c.setStrokeAlpha(style.opacity)
            c.setLineWidth(style.line_width)
            c.rect(rect.x, rect.y, rect.width, rect.height, stroke=1, fill=0)

        self._merge_overlay(page, paint)

    def serialize(self, handle: PdfWriter) -> bytes:
        buf = BytesIO()
        handle.write(buf)
        return buf.getvalue()

    # ------------------------------------------------------------------ #
    def _merge_overlay(self, page: PageObject, paint: Any) -> None:
        """Render *paint* onto a page-sized overlay and merge it onto *page*."""
        w, h = self.page_width(page), self.page_height(page)
        buf = BytesIO()
        c = canvas.Canvas(buf, pagesize=(w, h))
        paint(c)
        c.save()
        overlay_reader = PdfReader(BytesIO(buf.getvalue()))
        page.merge_page(overlay_reader.pages[0])
