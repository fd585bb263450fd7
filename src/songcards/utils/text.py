"""Text utilities for normalizing catalog metadata before it reaches a card."""

import re
from typing import Iterable

_BRACKETED = re.compile(r"\[.*?\]")
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str | None) -> str:
    """
    Clean a track title for printing.

    Removes bracketed annotations such as ``[Remastered 2011]`` and collapses
    runs of whitespace into single spaces.

    Args:
        title: Raw title from the catalog (may be None).

    Returns:
        Cleaned title, or an empty string.

    Examples:
        >>> normalize_title("Heroes [2017 Remaster]")
        'Heroes'
        >>> normalize_title("Take  On\\tMe")
        'Take On Me'
    """
    if not title:
        return ""
    cleaned = _BRACKETED.sub("", title)
    return _WHITESPACE.sub(" ", cleaned).strip()


def join_artists(names: Iterable[str | None]) -> str:
    """Join contributing artist names with ", ", skipping blanks."""
    return ", ".join(name for name in names if name)


def release_year(release_date: str | None) -> str:
    """
    Extract the four-digit year from a catalog release date.

    Release dates come as ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``.

    Args:
        release_date: Raw release date (may be None or empty).

    Returns:
        The year, or an empty string if unknown.
    """
    if not release_date:
        return ""
    return release_date[:4]
