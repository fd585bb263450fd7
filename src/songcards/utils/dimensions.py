"""Page sizes and dimension utilities.

All page coordinates in songcards use PDF points with a top-left origin:
x grows to the right, y grows down the page. The ReportLab surface
converts to its bottom-left origin at the last moment.
"""

from dataclasses import dataclass as _dataclass

from songcards.types import TextAlign, VerticalAlign

# 1 mm ~= 2.83465 pt
MM_TO_PT = 2.83465


def mm_to_points(mm: float) -> float:
    """Convert millimeters to points."""
    return mm * MM_TO_PT


@_dataclass(frozen=True)
class PageSize:
    """Physical page size."""

    width_mm: float
    height_mm: float
    label: str  # display label for messages

    @property
    def width(self) -> float:
        """Page width in points."""
        return mm_to_points(self.width_mm)

    @property
    def height(self) -> float:
        """Page height in points."""
        return mm_to_points(self.height_mm)

    @property
    def points(self) -> tuple[float, float]:
        """(width, height) in points, as ReportLab expects for ``pagesize``."""
        return (self.width, self.height)


A4 = PageSize(210.0, 297.0, "A4 (210×297mm)")


@_dataclass(frozen=True)
class CellRect:
    """
    A card rectangle on the page, in points (top-left origin).

    Attributes:
        x: Left edge.
        y: Top edge.
        width: Card width.
        height: Card height.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, dx: float, dy: float | None = None) -> "CellRect":
        """
        Shrink the rectangle by ``dx`` on the left/right and ``dy`` on the top/bottom.

        Args:
            dx: Horizontal inset applied to both sides.
            dy: Vertical inset applied to both sides. Defaults to ``dx``.

        Returns:
            New CellRect sharing the same center.
        """
        if dy is None:
            dy = dx
        return CellRect(
            x=self.x + dx,
            y=self.y + dy,
            width=self.width - 2 * dx,
            height=self.height - 2 * dy,
        )


def fit_within(
    image_width: float,
    image_height: float,
    box: CellRect,
    align: TextAlign = "center",
    valign: VerticalAlign = "center",
) -> CellRect:
    """
    Scale an image into a box preserving aspect ratio.

    Args:
        image_width: Source width (any unit).
        image_height: Source height (same unit as width).
        box: Bounding box in points.
        align: Horizontal placement of the scaled image inside the box.
        valign: Vertical placement of the scaled image inside the box.

    Returns:
        The placed rectangle inside ``box``.
    """
    scale = min(box.width / image_width, box.height / image_height)
    width = image_width * scale
    height = image_height * scale

    if align == "left":
        x = box.x
    elif align == "right":
        x = box.right - width
    else:
        x = box.x + (box.width - width) / 2

    if valign == "top":
        y = box.y
    elif valign == "bottom":
        y = box.bottom - height
    else:
        y = box.y + (box.height - height) / 2

    return CellRect(x=x, y=y, width=width, height=height)
