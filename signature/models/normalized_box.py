from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class NormalizedBox:
    """
    Placement request as fractions of the page size.
    Origin top-left, y grows downward; every value is meant to lie in [0, 1].
    """
    x: float
    y: float
    width: float
    height: float
