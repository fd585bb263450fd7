"""Data models for tracks printed on cards."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class TrackRecord:
    """
    One song, as printed on a card.

    Values arrive already normalized: ``title`` has bracketed annotations
    removed, ``artist`` is a comma-joined list of contributing artists,
    ``year`` is a four-digit year or empty, ``link`` is the URI encoded in
    the QR code or empty.
    """

    title: str
    artist: str
    year: str = ""
    link: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrackRecord":
        """
        Build a record from a plain mapping (e.g. a JSON export).

        Accepts ``url`` as an alias for ``link``. Missing fields become empty
        strings; a numeric year is converted to text.

        Args:
            data: Mapping with title/artist/year/link keys.

        Returns:
            TrackRecord.
        """
        link = data.get("link")
        if link is None:
            link = data.get("url")
        year = data.get("year")
        return cls(
            title=str(data.get("title") or ""),
            artist=str(data.get("artist") or ""),
            year="" if year is None else str(year),
            link=str(link or ""),
        )

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
