"""Front face: decorative background and QR code."""

from songcards.api.models import TrackRecord
from songcards.design.base import CardFace, RendererContext
from songcards.render.surface import SurfaceImage


class FrontFace(CardFace):
    """Front of a card with a background and the track's QR code."""

    def __init__(self, background: SurfaceImage | None = None) -> None:
        """
        Initialize front face.

        Args:
            background: Decoded background image stretched over every card.
                If None, cards get the theme's flat fallback fill.
        """
        self.background = background

    def render(self, context: RendererContext, track: TrackRecord, code: SurfaceImage | None) -> None:
        """Render background, QR code and optional cut frame."""
        surface = context.surface
        rect = context.rect

        if self.background is not None:
            surface.draw_image(self.background, rect, fit=False)
        else:
            surface.fill_rect(rect, context.theme.fallback_background)

        # Tracks without a link keep the background only
        if code is not None:
            padding = context.layout.code_padding
            surface.draw_image(code, rect.inset(padding), fit=True, align="center", valign="center")

        if context.theme.draw_frames:
            surface.stroke_rect(rect)
