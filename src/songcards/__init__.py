"""Printable duplex song cards from Spotify playlists."""

__version__ = "0.1.0"

# High-level Python API
from songcards.api.builder import (
    fetch_playlist_tracks,
    generate_cards_from_playlist,
    load_tracks_from_json,
    render_tracks_to_pdf,
)
from songcards.api.models import TrackRecord
from songcards.api.spotify import SpotifyClient
from songcards.config import Config, Layout, Theme, load_config
from songcards.design.grid import GridGeometry
from songcards.errors import (
    ConfigurationError,
    DrawingError,
    EncodingError,
    SongCardsError,
    UpstreamFetchError,
)
from songcards.render.pdf import SheetRenderer

__all__ = [
    "Config",
    "ConfigurationError",
    "DrawingError",
    "EncodingError",
    "GridGeometry",
    "Layout",
    "SheetRenderer",
    "SongCardsError",
    "SpotifyClient",
    "Theme",
    "TrackRecord",
    "UpstreamFetchError",
    "fetch_playlist_tracks",
    "generate_cards_from_playlist",
    "load_config",
    "load_tracks_from_json",
    "render_tracks_to_pdf",
]
