"""pypdf/reportlab backend against real in-memory PDFs."""

from __future__ import annotations

import unittest
from io import BytesIO

from pypdf import PdfReader

from signature.adapters.pypdf_backend import PypdfDocumentBackend
from signature.logic.image_decoder import decode_image
from signature.models.outline_style import OutlineStyle
from signature.models.placement_rect import PlacementRect
from signature.tests.pdf_fixtures import jpeg_payload, make_pdf, png_payload


def _xobjects(page) -> dict:
    if "/Resources" not in page:
        return {}
    resources = page["/Resources"]
    if "/XObject" not in resources:
        return {}
    return dict(resources["/XObject"])


class TestPypdfDocumentBackend(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = PypdfDocumentBackend()
        self.handle = self.backend.load(make_pdf([(600, 800), (842, 595)]))

    def test_pages_and_sizes(self) -> None:
        pages = self.backend.pages(self.handle)
        self.assertEqual(len(pages), 2)
        self.assertAlmostEqual(self.backend.page_width(pages[0]), 600)
        self.assertAlmostEqual(self.backend.page_height(pages[0]), 800)
        self.assertAlmostEqual(self.backend.page_width(pages[1]), 842)
        self.assertAlmostEqual(self.backend.page_height(pages[1]), 595)

    def test_draw_image_adds_image_only_to_target_page(self) -> None:
        for payload in (png_payload(), jpeg_payload()):
            with self.subTest(payload=payload[:16]):
                handle = self.backend.load(make_pdf([(600, 800), (600, 800)]))
                pages = self.backend.pages(handle)
                image = self.backend.embed_image(handle, decode_image(payload))
                self.backend.draw_image(pages[0], image, PlacementRect(50, 600, 200, 100))

                out = PdfReader(BytesIO(self.backend.serialize(handle)))
                self.assertEqual(len(out.pages), 2)
                self.assertTrue(_xobjects(out.pages[0]))
                self.assertFalse(_xobjects(out.pages[1]))

    def test_outline_keeps_document_valid(self) -> None:
        page = self.backend.pages(self.handle)[1]
        before = self.backend.serialize(self.backend.load(make_pdf([(600, 800), (842, 595)])))
        self.backend.draw_outline(page, PlacementRect(10, 10, 100, 50), OutlineStyle())
        after = self.backend.serialize(self.handle)
        self.assertNotEqual(before, after)
        self.assertEqual(len(PdfReader(BytesIO(after)).pages), 2)

    def test_garbage_does_not_load(self) -> None:
        with self.assertRaises(Exception):
            self.backend.load(b"definitely not a pdf")


if __name__ == "__main__":
    unittest.main()
