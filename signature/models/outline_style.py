from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class OutlineStyle:
    """Debug border drawn around the requested target box."""
    color_rgb: Tuple[int, int, int] = (255, 0, 0)  # RGB 0–255
    line_width: float = 1.0
    opacity: float = 0.8
