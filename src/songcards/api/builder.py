"""High-level API for programmatic card generation."""

import json
import logging
import random
from pathlib import Path
from typing import Sequence

from songcards.api.models import TrackRecord
from songcards.api.spotify import SpotifyClient
from songcards.config import Config, SpotifyConfig
from songcards.errors import ConfigurationError
from songcards.render.pdf import SheetRenderer

logger = logging.getLogger(__name__)


def fetch_playlist_tracks(url: str, config: Config) -> list[TrackRecord]:
    """
    Fetch all playable tracks of a Spotify playlist.

    Args:
        url: Playlist URL, ``spotify:playlist:`` URI or bare ID.
        config: Configuration with Spotify credentials. Falls back to the
            SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET environment variables.

    Returns:
        Tracks in playlist order (possibly empty).

    Raises:
        ConfigurationError: If no Spotify credentials are available.
        ValueError: If the playlist URL is not recognized.
        UpstreamFetchError: If Spotify cannot be reached or rejects the request.
    """
    credentials = config.spotify or SpotifyConfig.from_env()
    if credentials is None:
        raise ConfigurationError(
            "No Spotify credentials: add a [spotify] table to config.toml or set "
            "SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET"
        )

    playlist_id = SpotifyClient.extract_playlist_id(url)
    client = SpotifyClient(credentials)

    logger.info(f"Fetching playlist {playlist_id} from Spotify...")
    return client.fetch_all_tracks(playlist_id)


def render_tracks_to_pdf(
    tracks: Sequence[TrackRecord],
    output_path: Path,
    config: Config | None = None,
    seed: int | None = None,
) -> Path:
    """
    Render tracks to a duplex card PDF file.

    Args:
        tracks: Tracks in print order.
        output_path: Path of the PDF to write.
        config: Layout and theme. Defaults to Config().
        seed: Seed for back-card colors; None gives different colors each run.

    Returns:
        The output path.
    """
    config = config or Config()
    renderer = SheetRenderer(
        layout=config.layout,
        theme=config.theme,
        rng=random.Random(seed),
    )
    return renderer.render_to_file(tracks, Path(output_path))


def generate_cards_from_playlist(
    url: str,
    output_path: Path,
    config: Config,
    seed: int | None = None,
) -> Path | None:
    """
    Fetch a playlist and render its tracks to a card PDF.

    Args:
        url: Playlist URL, URI or ID.
        output_path: Path of the PDF to write.
        config: Credentials, layout and theme.
        seed: Seed for back-card colors.

    Returns:
        The output path, or None if the playlist has no playable tracks
        (nothing is written in that case).

    Example:
        ```python
        from songcards import generate_cards_from_playlist, load_config

        config = load_config()
        generate_cards_from_playlist(
            "https://open.spotify.com/playlist/37i9dQZF1DX4UtSsGT1Sbe",
            Path("cards.pdf"),
            config,
        )
        ```
    """
    tracks = fetch_playlist_tracks(url, config)
    if not tracks:
        logger.info("Playlist has no playable tracks, nothing to generate")
        return None
    return render_tracks_to_pdf(tracks, output_path, config, seed=seed)


def load_tracks_from_json(path: Path) -> list[TrackRecord]:
    """
    Load tracks from a JSON file.

    The file holds a list of objects with ``title``, ``artist``, ``year``
    and ``link`` (or ``url``) keys.

    Args:
        path: JSON file path.

    Returns:
        Tracks in file order.

    Raises:
        ValueError: If the file is not a JSON list of objects.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError(f"{path} must contain a JSON list of track objects")

    return [TrackRecord.from_dict(item) for item in data]


def save_tracks_to_json(tracks: Sequence[TrackRecord], path: Path) -> None:
    """Write tracks to a JSON file readable by ``load_tracks_from_json``."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump([track.to_dict() for track in tracks], f, ensure_ascii=False, indent=2)
