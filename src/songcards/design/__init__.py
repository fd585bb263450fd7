"""Card faces and sheet grid geometry."""

from songcards.design.base import CardFace, RendererContext
from songcards.design.faces import BackFace, FrontFace, place_back_text
from songcards.design.grid import GridGeometry

__all__ = [
    "BackFace",
    "CardFace",
    "FrontFace",
    "GridGeometry",
    "RendererContext",
    "place_back_text",
]
