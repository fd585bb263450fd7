#!/usr/bin/env python3
"""
Manual Tracks Example: Cards Without Spotify

Build TrackRecords by hand and render them with a custom layout and theme.
"""

import random
from pathlib import Path

from songcards import Layout, SheetRenderer, Theme, TrackRecord

tracks = [
    TrackRecord("Take On Me", "a-ha", "1985", "https://open.spotify.com/track/2WfaOiMkCvy7F5fcp2zZ8L"),
    TrackRecord("Lose Yourself", "Eminem", "2002", "https://open.spotify.com/track/5Z01UMMf7V1o0MzF86s6WJ"),
    TrackRecord("As It Was", "Harry Styles", "2022", "https://open.spotify.com/track/4Dvkj6JhhA12EX05fT7y2e"),
    TrackRecord("Shape of You", "Ed Sheeran", "2017", "https://open.spotify.com/track/7qiZfU4dY1lWllzX7mPBI3"),
    TrackRecord(
        "Sunflower - Spider-Man: Into the Spider-Verse",
        "Post Malone, Swae Lee",
        "2018",
        "https://open.spotify.com/track/3KkXRkHbMCARz0aVfEt68P",
    ),
]

# Slightly smaller cards with a gap and cut frames, no background image
layout = Layout(card_width_mm=65, card_height_mm=65, gap_mm=2, margin_mm=5)
theme = Theme(background_image=None, draw_frames=True)

renderer = SheetRenderer(layout=layout, theme=theme, rng=random.Random(42))
renderer.render_to_file(tracks, Path("manual_cards.pdf"))

print("✓ Cards saved to: manual_cards.pdf")
