"""Font registration and management."""

import logging
from dataclasses import dataclass
from pathlib import Path

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from songcards.config import Theme
from songcards.errors import DrawingError
from songcards.utils.assets import AssetRef

logger = logging.getLogger(__name__)

# Registered TTF fonts: font name -> file path
_FONT_PATHS: dict[str, Path] = {}


def _normalize_font_name(name: str) -> str:
    """
    Normalize a font name to TitleCase convention.

    Converts hyphen-separated parts to Title Case to match PostScript naming.

    Examples:
        "sunflower-medium" → "Sunflower-Medium"
        "helvetica-bold" → "Helvetica-Bold"

    Args:
        name: Font name to normalize (can be any case)

    Returns:
        TitleCase font name
    """
    parts = name.split('-')
    return '-'.join(part.title() for part in parts)


def register_font_file(font_path: Path) -> str:
    """
    Register a TTF file with ReportLab under a TitleCase name based on its filename.

    Examples:
        - Sunflower-Bold.ttf → registered as "Sunflower-Bold"
        - my-custom-font.ttf → registered as "My-Custom-Font"

    Args:
        font_path: Path to a .ttf file.

    Returns:
        Registered font name.

    Raises:
        DrawingError: If the file is not a usable TrueType font.
    """
    font_name = _normalize_font_name(font_path.stem)

    if _FONT_PATHS.get(font_name) == font_path:
        logger.debug(f"Font '{font_name}' already registered")
        return font_name

    try:
        pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
    except (TTFError, OSError) as e:
        raise DrawingError(f"Failed to register font {font_path}: {e}") from e

    _FONT_PATHS[font_name] = font_path
    logger.info(f"Registered font: {font_name} from {font_path.name}")
    return font_name


def resolve_font(asset: AssetRef, fallback: str = "Helvetica") -> str:
    """
    Resolve an optional font asset to a registered font name.

    Resolution priority:
    1. The asset's TTF file, if it was found on disk
    2. The fallback font (a PDF built-in such as Helvetica)

    Args:
        asset: Resolved font file reference.
        fallback: Built-in font used when the asset is unavailable.

    Returns:
        Registered font name.

    Raises:
        DrawingError: If the font file exists but cannot be loaded.
    """
    if asset.path is not None:
        return register_font_file(asset.path)

    logger.info(f"Using fallback font '{fallback}' for {asset.name}")
    return fallback


@dataclass(frozen=True)
class FontSet:
    """Registered font names for the three back-card text roles."""

    artist: str = "Helvetica"
    year: str = "Helvetica-Bold"
    title: str = "Helvetica"

    @classmethod
    def from_theme(cls, theme: Theme, base_dir: Path | None = None) -> "FontSet":
        """
        Resolve the theme's font files once, falling back to built-ins.

        Args:
            theme: Theme with font paths and fallbacks.
            base_dir: Directory relative font paths are resolved against.

        Returns:
            FontSet with registered font names.
        """
        return cls(
            artist=resolve_font(
                AssetRef.resolve("artist font", theme.artist_font, base_dir), theme.artist_fallback
            ),
            year=resolve_font(
                AssetRef.resolve("year font", theme.year_font, base_dir), theme.year_fallback
            ),
            title=resolve_font(
                AssetRef.resolve("title font", theme.title_font, base_dir), theme.title_fallback
            ),
        )
