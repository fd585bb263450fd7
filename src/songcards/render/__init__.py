"""Rendering: drawing surfaces, QR codes and duplex sheets."""

from songcards.render.pdf import Sheet, SheetRenderer, paginate
from songcards.render.qr import encode_all, encode_link
from songcards.render.surface import PDFSurface, Surface, SurfaceImage

__all__ = [
    "PDFSurface",
    "Sheet",
    "SheetRenderer",
    "Surface",
    "SurfaceImage",
    "encode_all",
    "encode_link",
    "paginate",
]
