"""Configuration loading and validation."""

import os
import re
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from songcards.errors import ConfigurationError
from songcards.types import HexColor
from songcards.utils.dimensions import A4, PageSize, mm_to_points

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

# High-contrast back-card colors
DEFAULT_PALETTE: list[HexColor] = [
    "#ffd966",  # yellow
    "#ff9999",  # warm red-pink
    "#99ccff",  # light blue
    "#99e699",  # green
    "#ffcc99",  # apricot
    "#c299ff",  # violet
    "#ffb3d9",  # pink
    "#b3f0ff",  # turquoise
]


class SpotifyConfig(BaseModel):
    """Spotify Web API client credentials."""

    client_id: str
    client_secret: str

    @classmethod
    def from_env(cls) -> "SpotifyConfig | None":
        """
        Read credentials from SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET.

        Returns:
            SpotifyConfig, or None if either variable is unset.
        """
        client_id = os.environ.get("SPOTIFY_CLIENT_ID")
        client_secret = os.environ.get("SPOTIFY_CLIENT_SECRET")
        if not client_id or not client_secret:
            return None
        return cls(client_id=client_id, client_secret=client_secret)


class Layout(BaseModel):
    """
    Grid layout of cards on a sheet.

    Physical sizes are given in millimeters; padding values are in points.
    Different card sizes, gaps and grid counts are all expressed here:

        compact = Layout(card_width_mm=65, card_height_mm=65, gap_mm=2, margin_mm=5)
    """

    card_width_mm: float = 67.0
    """Card width in millimeters."""

    card_height_mm: float = 67.0
    """Card height in millimeters."""

    gap_mm: float = 0.0
    """Space between adjacent cards in millimeters."""

    margin_mm: float = 4.0
    """Space between the page edge and the first row/column in millimeters."""

    columns: int = 3
    """Cards per row."""

    rows: int = 4
    """Rows per page."""

    padding_x: float = 16.0
    """Horizontal inset of back-card text, in points."""

    padding_y: float = 16.0
    """Vertical inset of back-card text, in points."""

    code_padding: float = 42.0
    """Inset of the QR code from the front-card edge, in points."""

    @property
    def card_width(self) -> float:
        return mm_to_points(self.card_width_mm)

    @property
    def card_height(self) -> float:
        return mm_to_points(self.card_height_mm)

    @property
    def gap(self) -> float:
        return mm_to_points(self.gap_mm)

    @property
    def margin(self) -> float:
        return mm_to_points(self.margin_mm)

    @property
    def cards_per_page(self) -> int:
        return self.columns * self.rows

    def validate_fit(self, page: PageSize = A4) -> None:
        """
        Check that the grid is drawable on the page.

        Args:
            page: Target page size.

        Raises:
            ConfigurationError: If a dimension is non-positive, a count is not
                positive, or the grid runs off the page.
        """
        for name in ("card_width_mm", "card_height_mm"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("gap_mm", "margin_mm", "padding_x", "padding_y", "code_padding"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative, got {getattr(self, name)}")
        if self.columns < 1 or self.rows < 1:
            raise ConfigurationError(
                f"Grid needs at least one row and one column, got {self.columns}x{self.rows}"
            )

        grid_width = self.columns * (self.card_width + self.gap) - self.gap + 2 * self.margin
        grid_height = self.rows * (self.card_height + self.gap) - self.gap + 2 * self.margin
        # Small tolerance: mm->pt conversion of an exact fit can land a hair over
        if grid_width > page.width + 1e-6:
            raise ConfigurationError(
                f"{self.columns} columns of {self.card_width_mm}mm cards need "
                f"{grid_width:.1f}pt but the {page.label} page is {page.width:.1f}pt wide"
            )
        if grid_height > page.height + 1e-6:
            raise ConfigurationError(
                f"{self.rows} rows of {self.card_height_mm}mm cards need "
                f"{grid_height:.1f}pt but the {page.label} page is {page.height:.1f}pt tall"
            )
        if 2 * self.padding_x >= self.card_width:
            raise ConfigurationError("padding_x leaves no room for text on the card")
        if 2 * self.code_padding >= min(self.card_width, self.card_height):
            raise ConfigurationError("code_padding leaves no room for the QR code on the card")


class Theme(BaseModel):
    """
    Visual settings for both card faces.

    All parameters have sensible defaults. Override only what you need using
    Pydantic's model_copy():

        base = Theme()
        plain = base.model_copy(update={"background_image": None, "draw_frames": True})
    """

    # ========================================================================
    # Back face colors
    # ========================================================================
    palette: list[HexColor] = Field(default_factory=lambda: list(DEFAULT_PALETTE))
    """Back-card background colors; one is picked at random per card."""

    text_color: HexColor = "#000000"
    """Color of artist, year and title text."""

    # ========================================================================
    # Front face
    # ========================================================================
    background_image: Path | None = Path("img/qr_bg.png")
    """Decorative front background. Missing file falls back to ``fallback_background``."""

    fallback_background: HexColor = "#f0f0f0"
    """Flat front fill used when no background image is available."""

    code_dark: HexColor = "#000000"
    """Color of the dark QR modules."""

    code_transparent: bool = True
    """Render light QR modules transparent so the background shows through."""

    draw_frames: bool = False
    """Stroke a thin cut frame around every card on both faces."""

    # ========================================================================
    # Fonts
    # ========================================================================
    artist_font: Path | None = Path("fonts/Sunflower-Medium.ttf")
    """TTF file for the artist line. Missing file falls back to ``artist_fallback``."""

    year_font: Path | None = Path("fonts/Sunflower-Bold.ttf")
    """TTF file for the year. Missing file falls back to ``year_fallback``."""

    title_font: Path | None = Path("fonts/Sunflower-Light.ttf")
    """TTF file for the title. Missing file falls back to ``title_fallback``."""

    artist_fallback: str = "Helvetica"
    year_fallback: str = "Helvetica-Bold"
    title_fallback: str = "Helvetica"

    artist_size: float = 14
    """Font size for the artist block in points."""

    year_size: float = 42
    """Font size for the year in points."""

    title_size: float = 14
    """Font size for the title block in points."""

    # ========================================================================
    # Back text placement
    # ========================================================================
    artist_offset: float = 4
    """Extra distance of the artist block below the top padding, in points."""

    title_gap: float = 2
    """Minimum clearance between the year block and the title, in points."""

    leading_ratio: float = 1.2
    """Line height as a multiple of font size for wrapped text."""

    @field_validator("palette")
    @classmethod
    def _check_palette(cls, value: list[HexColor]) -> list[HexColor]:
        if not value:
            raise ValueError("palette must contain at least one color")
        for color in value:
            _check_hex(color)
        return value

    @field_validator("text_color", "fallback_background", "code_dark")
    @classmethod
    def _check_color(cls, value: HexColor) -> HexColor:
        return _check_hex(value)


def _check_hex(value: str) -> str:
    if not _HEX_COLOR.match(value):
        raise ValueError(f"expected a #rrggbb color, got {value!r}")
    return value


class Config(BaseModel):
    """Root configuration."""

    spotify: SpotifyConfig | None = None
    layout: Layout = Field(default_factory=Layout)
    theme: Theme = Field(default_factory=Theme)


def load_config(config_path: Path | None = None, allow_missing: bool = False) -> Config:
    """
    Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, looks for config.toml in current directory.
        allow_missing: Return defaults instead of raising when the file doesn't exist.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist and ``allow_missing`` is False.
        ConfigurationError: If config is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / "config.toml"

    if not config_path.exists():
        if allow_missing:
            return Config()
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.toml.example to config.toml and add your credentials."
        )

    try:
        with open(config_path, "rb") as f:
            config_dict = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {e}") from e

    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}:\n{e}") from e
