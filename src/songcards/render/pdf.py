"""Duplex sheet rendering."""

import logging
import math
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from songcards.api.models import TrackRecord
from songcards.config import Layout, Theme
from songcards.design.base import RendererContext
from songcards.design.faces import BackFace, FrontFace
from songcards.design.grid import GridGeometry
from songcards.fonts import FontSet
from songcards.render.qr import Encoder, encode_all, encode_link
from songcards.render.surface import PDFSurface, Surface, SurfaceImage
from songcards.utils.assets import AssetRef
from songcards.utils.dimensions import A4, PageSize

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[..., Surface]


@dataclass
class Sheet:
    """One physical double-sided page: up to ``cells_per_page`` tracks in order."""

    index: int
    tracks: list[TrackRecord]
    codes: list[bytes | None] = field(default_factory=list)


def paginate(
    tracks: Sequence[TrackRecord], codes: Sequence[bytes | None], per_page: int
) -> list[Sheet]:
    """
    Split tracks (and their QR codes) into sheets of ``per_page`` cards.

    Args:
        tracks: All tracks in print order.
        codes: QR code images aligned with ``tracks``.
        per_page: Cards per sheet.

    Returns:
        ``ceil(len(tracks) / per_page)`` sheets; only the last may be partial.
    """
    sheet_count = math.ceil(len(tracks) / per_page)
    return [
        Sheet(
            index=sheet_index,
            tracks=list(tracks[sheet_index * per_page:(sheet_index + 1) * per_page]),
            codes=list(codes[sheet_index * per_page:(sheet_index + 1) * per_page]),
        )
        for sheet_index in range(sheet_count)
    ]


class SheetRenderer:
    """Renders tracks to a duplex card document using ReportLab."""

    def __init__(
        self,
        layout: Layout | None = None,
        theme: Theme | None = None,
        rng: random.Random | None = None,
        encoder: Encoder | None = None,
        surface_factory: SurfaceFactory = PDFSurface,
        base_dir: Path | None = None,
        max_workers: int | None = None,
        page: PageSize = A4,
    ) -> None:
        """
        Initialize sheet renderer.

        Args:
            layout: Grid layout. Defaults to 3x4 cards of 67mm.
            theme: Visual settings. Defaults to Theme().
            rng: Random source for back-card colors; seed it for reproducible output.
            encoder: QR encoder for a single link. Defaults to the theme's colors.
            surface_factory: Creates the drawing surface (PDFSurface by default).
            base_dir: Directory relative asset paths are resolved against. Defaults to cwd.
            max_workers: Thread pool size for QR encoding.
            page: Page size of every page.
        """
        self.layout = layout or Layout()
        self.theme = theme or Theme()
        self.rng = rng or random.Random()
        self.encoder = encoder or self._default_encoder
        self.surface_factory = surface_factory
        self.base_dir = base_dir
        self.max_workers = max_workers
        self.page = page
        self.grid = GridGeometry.from_layout(self.layout)

    def _default_encoder(self, link: str) -> bytes:
        return encode_link(link, dark=self.theme.code_dark, transparent=self.theme.code_transparent)

    def encode_codes(self, tracks: Sequence[TrackRecord]) -> list[bytes | None]:
        """Generate all QR codes up front (None for tracks without a link)."""
        return encode_all([track.link for track in tracks], self.encoder, self.max_workers)

    def render(
        self, tracks: Sequence[TrackRecord], codes: Sequence[bytes | None] | None = None
    ) -> bytes:
        """
        Render tracks to a document with alternating front and back pages.

        Page order is front(sheet 1), back(sheet 1), front(sheet 2), ...
        Back pages mirror columns so a duplex print flipped on the short
        edge lines every back up with its front.

        Args:
            tracks: Tracks in print order.
            codes: Pre-rendered QR images aligned with ``tracks``. Generated
                concurrently if omitted.

        Returns:
            Finalized document bytes.

        Raises:
            ConfigurationError: If the layout does not fit the page.
            EncodingError: If any QR code fails to generate.
            DrawingError: If the surface rejects an image or font.
        """
        # Validate and resolve everything before the first mark is made
        self.layout.validate_fit(self.page)
        fonts = FontSet.from_theme(self.theme, self.base_dir)
        background_ref = AssetRef.resolve("background image", self.theme.background_image, self.base_dir)

        if codes is None:
            codes = self.encode_codes(tracks)
        elif len(codes) != len(tracks):
            raise ValueError(f"Got {len(codes)} QR codes for {len(tracks)} tracks")

        surface = self.surface_factory(page=self.page, leading_ratio=self.theme.leading_ratio)
        background = surface.load_image(background_ref.path) if background_ref.path else None

        front = FrontFace(background)
        back = BackFace(self.rng)

        sheets = paginate(tracks, codes, self.grid.cells_per_page)
        logger.info(
            f"Rendering {len(tracks)} card(s) on {len(sheets)} sheet(s) "
            f"({self.layout.columns}x{self.layout.rows} per page)"
        )

        for sheet in sheets:
            logger.debug(f"Sheet {sheet.index + 1}/{len(sheets)}: {len(sheet.tracks)} card(s)")
            self._render_front(surface, sheet, front, fonts)
            self._render_back(surface, sheet, back, fonts)

        return surface.finish()

    def render_to_file(
        self,
        tracks: Sequence[TrackRecord],
        output_path: Path,
        codes: Sequence[bytes | None] | None = None,
    ) -> Path:
        """
        Render tracks and write the document to ``output_path``.

        The file is only written once rendering has fully succeeded.

        Returns:
            The output path.
        """
        data = self.render(tracks, codes)
        output_path = Path(output_path)
        output_path.write_bytes(data)
        logger.info(f"PDF saved to: {output_path}")
        return output_path

    def _context(self, surface: Surface, rect, fonts: FontSet) -> RendererContext:
        return RendererContext(
            surface=surface,
            rect=rect,
            layout=self.layout,
            theme=self.theme,
            fonts=fonts,
        )

    def _render_front(self, surface: Surface, sheet: Sheet, face: FrontFace, fonts: FontSet) -> None:
        surface.begin_page()
        for idx, (track, code) in enumerate(zip(sheet.tracks, sheet.codes)):
            image: SurfaceImage | None = surface.load_image(code) if code is not None else None
            face.render(self._context(surface, self.grid.front_rect(idx), fonts), track, image)

    def _render_back(self, surface: Surface, sheet: Sheet, face: BackFace, fonts: FontSet) -> None:
        surface.begin_page()
        for idx, track in enumerate(sheet.tracks):
            face.render(self._context(surface, self.grid.back_rect(idx), fonts), track, None)
