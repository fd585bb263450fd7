#!/usr/bin/env python3
"""
Playlist Example: Cards for a Whole Spotify Playlist

This is the simplest way to create a card sheet programmatically.
"""

from pathlib import Path

from songcards import generate_cards_from_playlist, load_config

# Load config (for Spotify credentials)
config = load_config()

output = generate_cards_from_playlist(
    "https://open.spotify.com/playlist/37i9dQZF1DX4UtSsGT1Sbe",  # Replace with your playlist URL
    Path("my_cards.pdf"),
    config,
    seed=7,  # Same colors on every run
)

if output is None:
    print("Playlist has no playable tracks.")
else:
    print(f"✓ Cards saved to: {output}")
