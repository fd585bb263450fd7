"""Optional file assets (background image, font files)."""

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetRef:
    """
    An optional asset resolved once before rendering begins.

    ``path`` is None when the asset was not configured or is missing on disk;
    callers use their fallback (flat fill, built-in font) in that case.
    """

    name: str
    path: Path | None

    @classmethod
    def resolve(cls, name: str, path: Path | str | None, base_dir: Path | None = None) -> "AssetRef":
        """
        Probe the filesystem for an optional asset.

        Args:
            name: Human readable role name used in log messages.
            path: Configured path, absolute or relative to ``base_dir``.
            base_dir: Directory relative paths are resolved against. Defaults to cwd.

        Returns:
            AssetRef with ``path`` set only if the file exists.
        """
        if path is None:
            return cls(name=name, path=None)

        candidate = Path(path)
        if not candidate.is_absolute() and base_dir is not None:
            candidate = base_dir / candidate

        if candidate.is_file():
            logger.debug(f"Using {name}: {candidate}")
            return cls(name=name, path=candidate)

        logger.warning(f"{name} not found at {candidate}, using fallback")
        return cls(name=name, path=None)
