"""Recording drawing surface for renderer tests."""

from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path

from PIL import Image

from songcards.errors import DrawingError
from songcards.render.surface import Surface, SurfaceImage
from songcards.utils.dimensions import A4, CellRect, PageSize, fit_within


@dataclass
class FrontCard:
    """What was drawn for one front card."""

    rect: CellRect
    background: str  # "image" or the fill color
    code: bytes | None = None
    code_rect: CellRect | None = None


@dataclass
class BackCard:
    """What was drawn for one back card."""

    rect: CellRect
    color: str
    texts: list[tuple[str, float, str, float]] = field(default_factory=list)  # (text, y, font, size)

    def text(self, position: int) -> str:
        return self.texts[position][0]

    def y(self, position: int) -> float:
        return self.texts[position][1]


class RecordingSurface(Surface):
    """Surface that records every call instead of writing a document."""

    def __init__(self, page: PageSize = A4, leading_ratio: float = 1.2) -> None:
        super().__init__(page, leading_ratio)
        self.pages: list[list[tuple]] = []
        self.finished = False

    def _record(self, *call) -> None:
        assert self.pages, "drawing before begin_page()"
        self.pages[-1].append(call)

    def begin_page(self) -> None:
        self.pages.append([])

    def fill_rect(self, rect, color) -> None:
        self._record("fill", rect, color)

    def stroke_rect(self, rect, color="#000000", line_width=0.5) -> None:
        self._record("stroke", rect)

    def load_image(self, source) -> SurfaceImage:
        data = source.read_bytes() if isinstance(source, Path) else source
        try:
            with Image.open(BytesIO(data)) as img:
                width, height = img.size
        except OSError as e:
            raise DrawingError(f"Could not read image: {e}") from e
        return SurfaceImage(handle=data, width=width, height=height)

    def draw_image(self, image, box, fit=True, align="center", valign="center") -> CellRect:
        placed = fit_within(image.width, image.height, box, align, valign) if fit else box
        self._record("image", image.handle, placed, fit)
        return placed

    def draw_text(self, text, x, y, width, align="left", color="#000000") -> None:
        self._record("text", text, x, y, width, self.font_name, self.font_size)
        super().draw_text(text, x, y, width, align, color)

    def draw_text_lines(self, lines, x, y, width, align, color) -> None:
        pass

    def finish(self) -> bytes:
        self.finished = True
        return b"%recorded"


def front_cards(page: list[tuple]) -> list[FrontCard]:
    """Group a front page's calls into cards (each starts with its background)."""
    cards: list[FrontCard] = []
    for call in page:
        if call[0] == "fill":
            cards.append(FrontCard(rect=call[1], background=call[2]))
        elif call[0] == "image" and not call[3]:
            cards.append(FrontCard(rect=call[2], background="image"))
        elif call[0] == "image":
            cards[-1].code = call[1]
            cards[-1].code_rect = call[2]
    return cards


def back_cards(page: list[tuple]) -> list[BackCard]:
    """Group a back page's calls into cards (each starts with its color fill)."""
    cards: list[BackCard] = []
    for call in page:
        if call[0] == "fill":
            cards.append(BackCard(rect=call[1], color=call[2]))
        elif call[0] == "text":
            _, text, _, y, _, font, size = call
            cards[-1].texts.append((text, y, font, size))
    return cards
