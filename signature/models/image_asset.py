from __future__ import annotations
from dataclasses import dataclass, field

from .signature_enums import ImageKind


@dataclass(frozen=True)
class ImageAsset:
    """Decoded overlay image: pixel size plus the original encoded bytes."""
    width: int
    height: int
    data: bytes = field(repr=False)
    kind: ImageKind = ImageKind.JPEG

    @property
    def aspect(self) -> float:
        return self.width / self.height
