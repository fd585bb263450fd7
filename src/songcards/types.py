"""Type aliases used across the songcards package."""

from typing import Literal

# Color types
HexColor = str  # "#rrggbb"

# Text and image alignment
TextAlign = Literal["left", "center", "right"]
VerticalAlign = Literal["top", "center", "bottom"]
