"""Shared fixtures for songcards tests."""

from io import BytesIO

import pytest
from PIL import Image

from recording import RecordingSurface
from songcards.api.models import TrackRecord
from songcards.config import Layout, Theme


def png_bytes(shade: int = 0, size: tuple[int, int] = (40, 40)) -> bytes:
    """Small distinct PNG; ``shade`` makes each image's bytes unique."""
    img = Image.new("RGB", size, color=(shade % 256, (shade // 256) % 256, 128))
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def make_tracks(count: int) -> list[TrackRecord]:
    return [
        TrackRecord(
            title=f"Song {i}",
            artist=f"Artist {i}",
            year=str(1960 + i),
            link=f"https://open.spotify.com/track/{i:022d}",
        )
        for i in range(count)
    ]


@pytest.fixture
def plain_theme() -> Theme:
    """Theme with no file assets, so built-in fonts and flat fills are used."""
    return Theme(background_image=None, artist_font=None, year_font=None, title_font=None)


@pytest.fixture
def layout() -> Layout:
    return Layout()


@pytest.fixture
def recorder():
    """Surface factory for SheetRenderer that keeps the created surfaces."""
    surfaces: list[RecordingSurface] = []

    def factory(**kwargs) -> RecordingSurface:
        surface = RecordingSurface(**kwargs)
        surfaces.append(surface)
        return surface

    factory.surfaces = surfaces
    return factory


@pytest.fixture
def fake_encoder():
    """Encoder returning a distinct small PNG per link, recording the links it saw."""
    seen: list[str] = []

    def encode(link: str) -> bytes:
        seen.append(link)
        return png_bytes(int(link.rsplit("/", 1)[-1]))

    encode.seen = seen
    return encode
