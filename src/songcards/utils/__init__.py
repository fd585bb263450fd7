"""Utility modules."""

from songcards.utils.assets import AssetRef
from songcards.utils.dimensions import (
    A4,
    MM_TO_PT,
    CellRect,
    PageSize,
    fit_within,
    mm_to_points,
)
from songcards.utils.text import join_artists, normalize_title, release_year

__all__ = [
    "A4",
    "MM_TO_PT",
    "AssetRef",
    "CellRect",
    "PageSize",
    "fit_within",
    "join_artists",
    "mm_to_points",
    "normalize_title",
    "release_year",
]
