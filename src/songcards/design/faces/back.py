"""Back face: colored card with artist, year and title."""

import random
from dataclasses import dataclass

from songcards.api.models import TrackRecord
from songcards.config import Layout, Theme
from songcards.design.base import CardFace, RendererContext
from songcards.render.surface import SurfaceImage
from songcards.utils.dimensions import CellRect


@dataclass(frozen=True)
class BackTextLayout:
    """
    Vertical positions of the three back-card text blocks (top edges, in points).

    Attributes:
        inner_x: Left edge of the text column.
        inner_width: Width of the text column.
        artist_y: Top of the artist block, fixed below the top padding.
        year_y: Top of the year, centered on the card.
        title_y: Top of the title block.
        bottom_anchor: Title top that keeps its bottom on the bottom padding.
        min_above_year: Highest title top that still clears the year.
    """

    inner_x: float
    inner_width: float
    artist_y: float
    year_y: float
    title_y: float
    bottom_anchor: float
    min_above_year: float


def place_back_text(rect: CellRect, layout: Layout, theme: Theme, title_height: float) -> BackTextLayout:
    """
    Compute text positions for a back card.

    The year sits at a fixed position in the middle of the card. The title
    hugs the bottom padding unless it is tall enough to reach the year, in
    which case it starts just below the year and may run past the bottom
    padding. The artist block is fixed at the top and may overlap the year
    when it wraps to many lines.

    Args:
        rect: Card rectangle.
        layout: Layout with text padding.
        theme: Theme with font sizes and offsets.
        title_height: Measured height of the wrapped title.

    Returns:
        BackTextLayout with all positions.
    """
    year_y = rect.y + rect.height / 2 - theme.year_size / 2
    artist_y = rect.y + layout.padding_y + theme.artist_offset

    bottom_anchor = rect.y + rect.height - layout.padding_y - title_height
    min_above_year = year_y + theme.year_size + theme.title_gap

    return BackTextLayout(
        inner_x=rect.x + layout.padding_x,
        inner_width=rect.width - 2 * layout.padding_x,
        artist_y=artist_y,
        year_y=year_y,
        title_y=max(bottom_anchor, min_above_year),
        bottom_anchor=bottom_anchor,
        min_above_year=min_above_year,
    )


class BackFace(CardFace):
    """Back of a card: random palette color, artist on top, year centered, title below."""

    def __init__(self, rng: random.Random | None = None) -> None:
        """
        Initialize back face.

        Args:
            rng: Random source for background colors. Pass a seeded
                ``random.Random`` for reproducible output.
        """
        self.rng = rng or random.Random()

    def pick_color(self, palette: list[str]) -> str:
        """Pick a background color; every card is an independent draw."""
        return self.rng.choice(palette)

    def render(self, context: RendererContext, track: TrackRecord, code: SurfaceImage | None) -> None:
        """Render background color and the three text blocks."""
        surface = context.surface
        rect = context.rect
        theme = context.theme
        fonts = context.fonts

        surface.fill_rect(rect, self.pick_color(theme.palette))

        # Title height depends on the title font, measure before placing
        surface.set_font(fonts.title, theme.title_size)
        inner_width = rect.width - 2 * context.layout.padding_x
        title_height = surface.text_height(track.title, inner_width)
        placement = place_back_text(rect, context.layout, theme, title_height)

        surface.set_font(fonts.artist, theme.artist_size)
        surface.draw_text(
            track.artist, placement.inner_x, placement.artist_y, placement.inner_width,
            align="center", color=theme.text_color,
        )

        surface.set_font(fonts.year, theme.year_size)
        surface.draw_text(
            track.year, placement.inner_x, placement.year_y, placement.inner_width,
            align="center", color=theme.text_color,
        )

        surface.set_font(fonts.title, theme.title_size)
        surface.draw_text(
            track.title, placement.inner_x, placement.title_y, placement.inner_width,
            align="center", color=theme.text_color,
        )

        if theme.draw_frames:
            surface.stroke_rect(rect)
