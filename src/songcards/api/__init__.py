"""Track models and the Spotify playlist client."""

from songcards.api.models import TrackRecord
from songcards.api.spotify import SpotifyClient

__all__ = [
    "SpotifyClient",
    "TrackRecord",
]
