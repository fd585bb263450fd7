"""Card face implementations."""

from songcards.design.faces.back import BackFace, BackTextLayout, place_back_text
from songcards.design.faces.front import FrontFace

__all__ = ["BackFace", "BackTextLayout", "FrontFace", "place_back_text"]
