"""
Apply one embedded image to a selection of pages.

Page numbers are 1-based. Numbers without a matching page are skipped
silently, duplicates are drawn again (stacked).
"""
from __future__ import annotations

import logging
import numbers
from typing import Any, Iterable, List, Optional

from ..adapters.document_backend import DocumentBackend
from ..models.normalized_box import NormalizedBox
from ..models.outline_style import OutlineStyle
from .geometry import fit_into, target_rect

logger = logging.getLogger(__name__)

DEFAULT_PAGE_NUMBERS = (1,)


def _to_index(page_number: Any, page_count: int) -> Optional[int]:
    if isinstance(page_number, bool) or not isinstance(page_number, numbers.Integral):
        return None
    idx = int(page_number) - 1
    if 0 <= idx < page_count:
        return idx
    return None


def apply_to_pages(
    backend: DocumentBackend,
    handle: Any,
    image: Any,
    img_aspect: float,
    box: NormalizedBox,
    page_numbers: Optional[Iterable[Any]] = None,
    *,
    outline: Optional[OutlineStyle] = None,
) -> List[int]:
    """
    Draw *image* on every selected page and return the 0-based indices drawn on.

    An empty or missing selection means page 1. With *outline* set, the
    requested target box is also stroked on each page.
    """
    selected = list(page_numbers or ()) or list(DEFAULT_PAGE_NUMBERS)
    pages = backend.pages(handle)

    applied: List[int] = []
    for number in selected:
        idx = _to_index(number, len(pages))
        if idx is None:
            logger.debug("Skipping page %r (document has %d pages)", number, len(pages))
            continue

        page = pages[idx]
        target = target_rect(box, backend.page_width(page), backend.page_height(page))
        backend.draw_image(page, image, fit_into(target, img_aspect))

        if outline is not None:
            try:
                backend.draw_outline(page, target, outline)
            except Exception as ex:  # debug aid only
                logger.warning("Debug outline failed on page %d: %s", idx + 1, ex)

        applied.append(idx)
    return applied
