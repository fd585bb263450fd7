"""Card grid geometry for duplex sheets.

Cells are numbered row by row from the top-left corner of the page. The
back page uses the same rows with columns reversed, so after a duplex print
flipped on the short edge every back cell sits behind its front cell.
"""

from dataclasses import dataclass

from songcards.config import Layout
from songcards.utils.dimensions import CellRect


@dataclass(frozen=True)
class GridGeometry:
    """
    Pure mapping from a cell index to its rectangle on the front and back page.

    Attributes:
        card_width: Card width in points.
        card_height: Card height in points.
        gap: Space between adjacent cards in points.
        margin: Space between the page edge and the grid in points.
        columns: Cards per row.
        rows: Rows per page.
    """

    card_width: float
    card_height: float
    gap: float
    margin: float
    columns: int
    rows: int

    @classmethod
    def from_layout(cls, layout: Layout) -> "GridGeometry":
        return cls(
            card_width=layout.card_width,
            card_height=layout.card_height,
            gap=layout.gap,
            margin=layout.margin,
            columns=layout.columns,
            rows=layout.rows,
        )

    @property
    def cells_per_page(self) -> int:
        return self.columns * self.rows

    def position(self, idx: int) -> tuple[int, int]:
        """Return ``(row, column)`` of a front-page cell index."""
        return idx // self.columns, idx % self.columns

    def mirror_column(self, col: int) -> int:
        """Column a front column maps to on the back page."""
        return self.columns - 1 - col

    def back_position(self, idx: int) -> tuple[int, int]:
        """Return ``(row, column)`` on the back page for a front-page cell index."""
        row, col = self.position(idx)
        return row, self.mirror_column(col)

    def cell_rect(self, row: int, col: int) -> CellRect:
        """Rectangle of the cell at ``row``/``col``, in points from the top-left corner."""
        return CellRect(
            x=self.margin + col * (self.card_width + self.gap),
            y=self.margin + row * (self.card_height + self.gap),
            width=self.card_width,
            height=self.card_height,
        )

    def front_rect(self, idx: int) -> CellRect:
        """Rectangle of cell ``idx`` on the front page."""
        return self.cell_rect(*self.position(idx))

    def back_rect(self, idx: int) -> CellRect:
        """Rectangle of cell ``idx`` on the back page (column mirrored)."""
        return self.cell_rect(*self.back_position(idx))
