"""Base abstractions for card faces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from songcards.api.models import TrackRecord
from songcards.render.surface import Surface, SurfaceImage
from songcards.utils.dimensions import CellRect

if TYPE_CHECKING:
    from songcards.config import Layout, Theme
    from songcards.fonts import FontSet


@dataclass
class RendererContext:
    """Context passed to card face renderers."""

    surface: Surface
    rect: CellRect  # Card rectangle in points (top-left origin)
    layout: "Layout"
    theme: "Theme"
    fonts: "FontSet"


class CardFace(ABC):
    """One side of a card."""

    @abstractmethod
    def render(self, context: RendererContext, track: TrackRecord, code: SurfaceImage | None) -> None:
        """
        Draw this face of ``track`` inside ``context.rect``.

        Args:
            context: Rendering context with surface, card rectangle and styling.
            track: Track shown on the card.
            code: Decoded QR image for the track, or None if the track has no link.
        """
        pass
