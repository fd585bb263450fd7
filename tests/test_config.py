"""Configuration loading and layout validation."""

from pathlib import Path

import pytest

from songcards.config import DEFAULT_PALETTE, Config, Layout, SpotifyConfig, Theme, load_config
from songcards.errors import ConfigurationError


def test_default_layout_fits_a4() -> None:
    Layout().validate_fit()


def test_default_palette_has_distinct_colors() -> None:
    assert len(set(DEFAULT_PALETTE)) >= 6
    assert Theme().palette == DEFAULT_PALETTE


@pytest.mark.parametrize(
    "overrides",
    [
        {"columns": 4},  # 4 x 67mm + margins > 210mm
        {"rows": 5},  # 5 x 67mm + margins > 297mm
        {"margin_mm": 10},
        {"card_width_mm": 0},
        {"card_height_mm": -5},
        {"columns": 0},
        {"gap_mm": -1},
        {"padding_x": 120},
        {"code_padding": 100},
    ],
)
def test_invalid_layout_raises(overrides: dict) -> None:
    with pytest.raises(ConfigurationError):
        Layout(**overrides).validate_fit()


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Layout(columns=10).validate_fit()


def test_cards_per_page() -> None:
    assert Layout(columns=2, rows=5).cards_per_page == 10


def test_load_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
[spotify]
client_id = "abc"
client_secret = "xyz"

[layout]
card_width_mm = 65
card_height_mm = 65
gap_mm = 2
margin_mm = 5

[theme]
palette = ["#000000", "#ffffff"]
draw_frames = true
background_image = "bg.png"
"""
    )

    config = load_config(config_path)

    assert config.spotify == SpotifyConfig(client_id="abc", client_secret="xyz")
    assert config.layout.gap_mm == 2
    assert config.layout.columns == 3
    assert config.theme.palette == ["#000000", "#ffffff"]
    assert config.theme.draw_frames is True
    assert config.theme.background_image == Path("bg.png")


def test_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")


def test_missing_config_allowed_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "nope.toml", allow_missing=True)
    assert config == Config()
    assert config.spotify is None


@pytest.mark.parametrize(
    "body",
    [
        '[theme]\npalette = []\n',
        '[theme]\npalette = ["red"]\n',
        '[layout]\ncolumns = "three"\n',
        '[theme\n',
    ],
)
def test_invalid_config_raises_configuration_error(tmp_path: Path, body: str) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(body)
    with pytest.raises(ConfigurationError):
        load_config(config_path)


def test_spotify_credentials_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "id")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "secret")
    assert SpotifyConfig.from_env() == SpotifyConfig(client_id="id", client_secret="secret")


def test_spotify_credentials_from_env_incomplete(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "id")
    monkeypatch.delenv("SPOTIFY_CLIENT_SECRET", raising=False)
    assert SpotifyConfig.from_env() is None
