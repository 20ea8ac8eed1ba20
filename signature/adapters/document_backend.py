"""Document backend abstraction.

Page-addressable document capability used by the signing logic. The
signing code never touches a file format directly; it only opens a
document, reads page sizes, embeds an image and draws it, then asks for
the bytes back.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Sequence

from signature.models.image_asset import ImageAsset
from signature.models.outline_style import OutlineStyle
from signature.models.placement_rect import PlacementRect


class DocumentBackend(ABC):
    """Abstract backend for one mutable document per handle."""

    @abstractmethod
    def load(self, data: bytes) -> Any:
        """
        Open a document from raw bytes.

        Returns:
            Opaque document handle
        """
        raise NotImplementedError

    @abstractmethod
    def pages(self, handle: Any) -> Sequence[Any]:
        """Return the ordered page handles of the document."""
        raise NotImplementedError

    @abstractmethod
    def page_width(self, page: Any) -> float:
        raise NotImplementedError

    @abstractmethod
    def page_height(self, page: Any) -> float:
        raise NotImplementedError

    @abstractmethod
    def embed_image(self, handle: Any, asset: ImageAsset) -> Any:
        """
        Register an image with the document.

        Returns:
            Opaque image handle accepted by :meth:`draw_image`
        """
        raise NotImplementedError

    @abstractmethod
    def draw_image(self, page: Any, image: Any, rect: PlacementRect) -> None:
        """Draw *image* into *rect* (native page space, origin bottom-left)."""
        raise NotImplementedError

    @abstractmethod
    def draw_outline(self, page: Any, rect: PlacementRect, style: OutlineStyle) -> None:
        """Stroke the border of *rect*; used for debugging placements."""
        raise NotImplementedError

    @abstractmethod
    def serialize(self, handle: Any) -> bytes:
        """Write the (possibly mutated) document back to bytes."""
        raise NotImplementedError
