"""Drawing surfaces.

A surface takes page coordinates in points with a top-left origin (y grows
down the page), which is how the card grid is laid out. ``PDFSurface``
converts to ReportLab's bottom-left origin.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any

from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from songcards.errors import DrawingError
from songcards.types import HexColor as HexColorStr
from songcards.types import TextAlign, VerticalAlign
from songcards.utils.dimensions import A4, CellRect, PageSize, fit_within


@dataclass(frozen=True)
class SurfaceImage:
    """An image decoded once by a surface and drawable many times."""

    handle: Any  # surface-specific (ImageReader for PDFSurface)
    width: float  # pixels
    height: float  # pixels


def wrap_text(text: str, font_name: str, font_size: float, width: float) -> list[str]:
    """
    Break text into lines that fit ``width`` at the given font.

    Words longer than the width stay on their own line.
    """
    if not text:
        return []
    return simpleSplit(text, font_name, font_size, width)


class Surface(ABC):
    """Drawing operations the sheet renderer needs."""

    def __init__(self, page: PageSize = A4, leading_ratio: float = 1.2) -> None:
        """
        Initialize surface.

        Args:
            page: Page size of every page.
            leading_ratio: Line height as a multiple of font size for wrapped text.
        """
        self.page = page
        self.leading_ratio = leading_ratio
        self.font_name = "Helvetica"
        self.font_size = 12.0

    @abstractmethod
    def begin_page(self) -> None:
        """Start a new page; later drawing goes onto it."""

    @abstractmethod
    def fill_rect(self, rect: CellRect, color: HexColorStr) -> None:
        """Fill a rectangle with a flat color."""

    @abstractmethod
    def stroke_rect(self, rect: CellRect, color: HexColorStr = "#000000", line_width: float = 0.5) -> None:
        """Outline a rectangle."""

    @abstractmethod
    def load_image(self, source: bytes | Path) -> SurfaceImage:
        """
        Decode an image from bytes or a file.

        Raises:
            DrawingError: If the data is not a readable image.
        """

    @abstractmethod
    def draw_image(
        self,
        image: SurfaceImage,
        box: CellRect,
        fit: bool = True,
        align: TextAlign = "center",
        valign: VerticalAlign = "center",
    ) -> CellRect:
        """
        Place an image in a box.

        Args:
            image: Decoded image.
            box: Target box.
            fit: Preserve aspect ratio inside the box. If False, stretch to fill it.
            align: Horizontal placement when fitting.
            valign: Vertical placement when fitting.

        Returns:
            The rectangle actually covered.
        """

    @abstractmethod
    def draw_text_lines(
        self, lines: list[str], x: float, y: float, width: float, align: TextAlign, color: HexColorStr
    ) -> None:
        """Draw pre-wrapped lines with the active font, first line's top at ``y``."""

    @abstractmethod
    def finish(self) -> bytes:
        """Finalize the document and return its bytes."""

    def set_font(self, font_name: str, font_size: float) -> None:
        """Set the active font and size."""
        self.font_name = font_name
        self.font_size = font_size

    @property
    def line_height(self) -> float:
        return self.font_size * self.leading_ratio

    def text_height(self, text: str, width: float) -> float:
        """Height ``text`` would occupy at the active font wrapped to ``width``."""
        lines = wrap_text(text, self.font_name, self.font_size, width)
        return len(lines) * self.line_height

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        width: float,
        align: TextAlign = "left",
        color: HexColorStr = "#000000",
    ) -> None:
        """Draw text wrapped to ``width`` with its top edge at ``y``. Empty text draws nothing."""
        lines = wrap_text(text, self.font_name, self.font_size, width)
        if lines:
            self.draw_text_lines(lines, x, y, width, align, color)


class PDFSurface(Surface):
    """Surface writing a PDF with ReportLab into memory."""

    def __init__(self, page: PageSize = A4, leading_ratio: float = 1.2) -> None:
        super().__init__(page, leading_ratio)
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=page.points, pageCompression=1)
        self._page_open = False

    def _flip(self, y: float, height: float = 0.0) -> float:
        """Convert a top-left y coordinate to ReportLab's bottom-left origin."""
        return self.page.height - y - height

    def begin_page(self) -> None:
        if self._page_open:
            self._canvas.showPage()
        self._page_open = True

    def fill_rect(self, rect: CellRect, color: HexColorStr) -> None:
        c = self._canvas
        c.saveState()
        c.setFillColor(HexColor(color))
        c.rect(rect.x, self._flip(rect.y, rect.height), rect.width, rect.height, stroke=0, fill=1)
        c.restoreState()

    def stroke_rect(self, rect: CellRect, color: HexColorStr = "#000000", line_width: float = 0.5) -> None:
        c = self._canvas
        c.saveState()
        c.setStrokeColor(HexColor(color))
        c.setLineWidth(line_width)
        c.rect(rect.x, self._flip(rect.y, rect.height), rect.width, rect.height, stroke=1, fill=0)
        c.restoreState()

    def load_image(self, source: bytes | Path) -> SurfaceImage:
        try:
            if isinstance(source, Path):
                reader = ImageReader(str(source))
            else:
                reader = ImageReader(BytesIO(source))
            width, height = reader.getSize()
        except Exception as e:
            raise DrawingError(f"Could not read image: {e}") from e
        return SurfaceImage(handle=reader, width=width, height=height)

    def draw_image(
        self,
        image: SurfaceImage,
        box: CellRect,
        fit: bool = True,
        align: TextAlign = "center",
        valign: VerticalAlign = "center",
    ) -> CellRect:
        placed = fit_within(image.width, image.height, box, align, valign) if fit else box
        try:
            self._canvas.drawImage(
                image.handle,
                placed.x,
                self._flip(placed.y, placed.height),
                width=placed.width,
                height=placed.height,
                mask="auto",
            )
        except Exception as e:
            raise DrawingError(f"Could not draw image: {e}") from e
        return placed

    def set_font(self, font_name: str, font_size: float) -> None:
        try:
            self._canvas.setFont(font_name, font_size)
        except KeyError as e:
            raise DrawingError(f"Unknown font {font_name!r}") from e
        super().set_font(font_name, font_size)

    def draw_text_lines(
        self, lines: list[str], x: float, y: float, width: float, align: TextAlign, color: HexColorStr
    ) -> None:
        c = self._canvas
        c.setFillColor(HexColor(color))
        c.setFont(self.font_name, self.font_size)
        ascent, _ = pdfmetrics.getAscentDescent(self.font_name, self.font_size)

        for index, line in enumerate(lines):
            baseline = self._flip(y + index * self.line_height + ascent)
            if align == "center":
                c.drawCentredString(x + width / 2, baseline, line)
            elif align == "right":
                c.drawRightString(x + width, baseline, line)
            else:
                c.drawString(x, baseline, line)

    def finish(self) -> bytes:
        if self._page_open:
            self._canvas.showPage()
            self._page_open = False
        self._canvas.save()
        return self._buffer.getvalue()
