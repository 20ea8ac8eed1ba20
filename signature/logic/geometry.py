"""
Placement geometry.

Converts a :class:`NormalizedBox` (fractions of the page, origin top-left)
into a :class:`PlacementRect` in PDF page space (points, origin
bottom-left) and fits the image inside it without distortion.
"""
from __future__ import annotations

import math
from typing import Any

from ..exceptions.errors import DegenerateBoxError, InvalidImageError
from ..models.normalized_box import NormalizedBox
from ..models.placement_rect import PlacementRect


def clamp01(value: Any) -> float:
    """Clamp to [0, 1]; anything non-numeric (or NaN) becomes 0."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(v):
        return 0.0
    return max(0.0, min(1.0, v))


def clamp_box(box: NormalizedBox) -> NormalizedBox:
    return NormalizedBox(
        x=clamp01(box.x),
        y=clamp01(box.y),
        width=clamp01(box.width),
        height=clamp01(box.height),
    )


def target_rect(box: NormalizedBox, page_w: float, page_h: float) -> PlacementRect:
    """Requested box in page space, before aspect fitting."""
    b = clamp_box(box)
    abs_w = b.width * page_w
    abs_h = b.height * page_h
    abs_x = b.x * page_w
    abs_y_top = b.y * page_h
    # normalized y runs from the top, PDF y from the bottom
    abs_y = page_h - abs_y_top - abs_h
    if not (abs_w > 0 and abs_h > 0 and math.isfinite(abs_w) and math.isfinite(abs_h)):
        raise DegenerateBoxError(
            f"Target box has no area ({abs_w:g} x {abs_h:g} pt on a {page_w:g} x {page_h:g} page)"
        )
    return PlacementRect(x=abs_x, y=abs_y, width=abs_w, height=abs_h)


def fit_into(target: PlacementRect, img_aspect: float) -> PlacementRect:
    """Largest rect of aspect *img_aspect* centred inside *target*."""
    if not (img_aspect > 0 and math.isfinite(img_aspect)):
        raise InvalidImageError(f"Image aspect ratio must be positive, got {img_aspect!r}")

    box_aspect = target.width / target.height
    if img_aspect > box_aspect:
        # image wider than box: fit to width, centre vertically
        draw_w = target.width
        draw_h = target.width / img_aspect
        offset_x = 0.0
        offset_y = (target.height - draw_h) / 2
    else:
        # image taller than box: fit to height, centre horizontally
        draw_h = target.height
        draw_w = target.height * img_aspect
        offset_x = (target.width - draw_w) / 2
        offset_y = 0.0

    return PlacementRect(x=target.x + offset_x, y=target.y + offset_y, width=draw_w, height=draw_h)


def resolve_placement(box: NormalizedBox, page_w: float, page_h: float, img_aspect: float) -> PlacementRect:
    return fit_into(target_rect(box, page_w, page_h), img_aspect)
