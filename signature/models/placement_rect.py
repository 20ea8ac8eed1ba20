from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class PlacementRect:
    """
    Absolute rectangle on a PDF page (points; 1 pt = 1/72 inch), origin bottom-left.
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height
