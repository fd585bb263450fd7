"""CLI interface for the song card generator."""

import logging
from pathlib import Path
from typing import Sequence

import click

from songcards.api.builder import (
    fetch_playlist_tracks,
    load_tracks_from_json,
    render_tracks_to_pdf,
    save_tracks_to_json,
)
from songcards.api.models import TrackRecord
from songcards.config import Config, load_config
from songcards.errors import SongCardsError
from songcards.utils.dimensions import A4

DEFAULT_OUTPUT = Path("song_cards.pdf")
PRINT_HINT = "Print double-sided with 'Flip on short edge'."


def _load(config_path: Path | None) -> Config:
    # Without --config a missing ./config.toml just means defaults
    return load_config(config_path, allow_missing=config_path is None)


def _apply_overrides(
    cfg: Config, columns: int | None, rows: int | None, frames: bool, background: Path | None
) -> Config:
    layout_updates = {}
    if columns is not None:
        layout_updates["columns"] = columns
    if rows is not None:
        layout_updates["rows"] = rows

    theme_updates = {}
    if frames:
        theme_updates["draw_frames"] = True
    if background is not None:
        theme_updates["background_image"] = background

    return cfg.model_copy(update={
        "layout": cfg.layout.model_copy(update=layout_updates),
        "theme": cfg.theme.model_copy(update=theme_updates),
    })


def _prepare(
    config_path: Path | None, columns: int | None, rows: int | None, frames: bool, background: Path | None
) -> Config:
    cfg = _apply_overrides(_load(config_path), columns, rows, frames, background)
    # Reject a bad grid before fetching or counting sheets
    cfg.layout.validate_fit(A4)
    return cfg


def _render(tracks: Sequence[TrackRecord], output: Path, cfg: Config, seed: int | None) -> None:
    sheets = -(-len(tracks) // cfg.layout.cards_per_page)
    click.echo(f"Generating {len(tracks)} card(s) on {sheets} sheet(s) ({sheets * 2} pages)...")
    render_tracks_to_pdf(tracks, output, cfg, seed=seed)
    click.echo(f"✓ Cards saved to: {output}")
    click.echo(PRINT_HINT)


def _fail(message: object) -> None:
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


config_option = click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to config.toml file. Defaults to ./config.toml if present.",
)
output_option = click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output PDF file path.",
)
seed_option = click.option(
    "--seed",
    type=int,
    help="Seed for back-card colors (same seed, same colors).",
)
columns_option = click.option("--columns", type=click.IntRange(min=1), help="Cards per row.")
rows_option = click.option("--rows", type=click.IntRange(min=1), help="Rows per page.")
frames_option = click.option("--frames", is_flag=True, help="Draw thin cut frames around cards.")
background_option = click.option(
    "--background",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Front background image (missing file falls back to a flat fill).",
)


@click.group()
@click.version_option(package_name="songcards")
@click.option("-v", "--verbose", is_flag=True, help="Show progress logging.")
def main(verbose: bool) -> None:
    """Generate printable double-sided song cards with QR codes."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("url")
@output_option
@config_option
@seed_option
@columns_option
@rows_option
@frames_option
@background_option
@click.option(
    "--save-json",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also save the fetched tracks as JSON.",
)
def playlist(
    url: str,
    output: Path | None,
    config: Path | None,
    seed: int | None,
    columns: int | None,
    rows: int | None,
    frames: bool,
    background: Path | None,
    save_json: Path | None,
) -> None:
    """
    Generate cards for every track of a Spotify playlist.

    URL can be a playlist link (https://open.spotify.com/playlist/ID),
    a spotify:playlist:ID URI or the bare ID.
    """
    try:
        cfg = _prepare(config, columns, rows, frames, background)

        click.echo("Fetching playlist...")
        tracks = fetch_playlist_tracks(url, cfg)
        if not tracks:
            click.echo("No tracks found in the playlist, nothing to generate.")
            return
        click.echo(f"  Found {len(tracks)} track(s)")

        if save_json is not None:
            save_tracks_to_json(tracks, save_json)
            click.echo(f"  Tracks saved to: {save_json}")

        _render(tracks, output or DEFAULT_OUTPUT, cfg, seed)

    except (SongCardsError, FileNotFoundError, ValueError) as e:
        _fail(e)


@main.command()
@click.argument("url")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("tracks.json"),
    show_default=True,
    help="Output JSON file path.",
)
@config_option
def fetch(url: str, output: Path, config: Path | None) -> None:
    """Fetch a Spotify playlist and save its tracks as JSON for later editing."""
    try:
        tracks = fetch_playlist_tracks(url, _load(config))
        save_tracks_to_json(tracks, output)
        click.echo(f"✓ {len(tracks)} track(s) saved to: {output}")
    except (SongCardsError, FileNotFoundError, ValueError) as e:
        _fail(e)


@main.command(name="json")
@click.argument("tracks_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@output_option
@config_option
@seed_option
@columns_option
@rows_option
@frames_option
@background_option
def from_json(
    tracks_file: Path,
    output: Path | None,
    config: Path | None,
    seed: int | None,
    columns: int | None,
    rows: int | None,
    frames: bool,
    background: Path | None,
) -> None:
    """Generate cards from a JSON list of {title, artist, year, link} objects."""
    try:
        cfg = _prepare(config, columns, rows, frames, background)
        tracks = load_tracks_from_json(tracks_file)
        if not tracks:
            click.echo("No tracks in file, nothing to generate.")
            return
        _render(tracks, output or tracks_file.with_suffix(".pdf"), cfg, seed)

    except (SongCardsError, FileNotFoundError, ValueError) as e:
        _fail(e)


if __name__ == "__main__":
    main()
