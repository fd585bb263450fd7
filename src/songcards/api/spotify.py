"""Spotify Web API client for reading playlists."""

import logging
import re
from typing import Any
from urllib.parse import urlparse

import requests

from songcards.api.models import TrackRecord
from songcards.config import SpotifyConfig
from songcards.errors import UpstreamFetchError
from songcards.utils.text import join_artists, normalize_title, release_year

logger = logging.getLogger(__name__)

TOKEN_URL = "https://accounts.spotify.com/api/token"
API_URL = "https://api.spotify.com/v1"
PAGE_LIMIT = 100

_PLAYLIST_ID = re.compile(r"^[A-Za-z0-9]+$")


class SpotifyClient:
    """Client for the Spotify Web API using the client-credentials flow."""

    def __init__(
        self,
        config: SpotifyConfig,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize Spotify client.

        Args:
            config: Spotify client credentials.
            session: Optional requests session (shared connection pool, tests).
            timeout: Per-request timeout in seconds.
        """
        self.config = config
        self.session = session or requests.Session()
        self.timeout = timeout

        # Bearer token cache
        self._access_token: str | None = None

    def _authenticate(self) -> str:
        """
        Obtain an access token via the client-credentials grant.

        Returns:
            Bearer token.

        Raises:
            UpstreamFetchError: If authentication fails.
        """
        try:
            response = self.session.post(
                TOKEN_URL,
                data={"grant_type": "client_credentials"},
                auth=(self.config.client_id, self.config.client_secret),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise UpstreamFetchError(f"Spotify authentication failed: {e}") from e
        except ValueError as e:
            raise UpstreamFetchError(f"Spotify authentication returned invalid JSON: {e}") from e

        if "access_token" not in data:
            raise UpstreamFetchError("Spotify authentication failed: no access_token in response")

        return data["access_token"]

    def _get_token(self) -> str:
        """Get cached token or authenticate if needed."""
        if self._access_token is None:
            self._access_token = self._authenticate()
        return self._access_token

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Issue an authenticated GET against the Web API.

        Raises:
            UpstreamFetchError: On network, HTTP or decoding failure.
        """
        headers = {
            "authorization": f"Bearer {self._get_token()}",
            "accept": "application/json",
        }
        try:
            response = self.session.get(
                f"{API_URL}{path}", params=params, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise UpstreamFetchError(f"Spotify request {path} failed: {e}") from e
        except ValueError as e:
            raise UpstreamFetchError(f"Spotify request {path} returned invalid JSON: {e}") from e

    def fetch_all_tracks(self, playlist_id: str) -> list[TrackRecord]:
        """
        Fetch every playable track of a playlist, in playlist order.

        Pages through the playlist until an empty or short page is returned.
        Entries without a track or album (removed or local-only files) are
        skipped.

        Args:
            playlist_id: Spotify playlist ID.

        Returns:
            List of normalized TrackRecords (may be empty).

        Raises:
            UpstreamFetchError: If authentication or any page request fails.
        """
        offset = 0
        items: list[dict[str, Any]] = []

        while True:
            page = self._get(
                f"/playlists/{playlist_id}/tracks",
                params={"offset": offset, "limit": PAGE_LIMIT},
            )
            page_items = page.get("items") or []
            if not page_items:
                break
            items.extend(page_items)
            logger.debug(f"Fetched {len(items)} playlist entries so far")
            if len(page_items) < PAGE_LIMIT:
                break
            offset += PAGE_LIMIT

        tracks = [
            track_from_item(item)
            for item in items
            if item.get("track") and item["track"].get("album")
        ]
        skipped = len(items) - len(tracks)
        if skipped:
            logger.info(f"Skipped {skipped} unplayable playlist entries")
        logger.info(f"Fetched {len(tracks)} tracks from playlist {playlist_id}")
        return tracks

    @staticmethod
    def extract_playlist_id(url: str) -> str:
        """
        Extract a playlist ID from a Spotify URL, URI or bare ID.

        Args:
            url: ``https://open.spotify.com/playlist/ID?si=...``,
                 ``spotify:playlist:ID`` or just ``ID``.

        Returns:
            Playlist ID.

        Raises:
            ValueError: If the input format is not recognized.

        Examples:
            >>> SpotifyClient.extract_playlist_id("https://open.spotify.com/playlist/37i9dQZF1DX4UtSsGT1Sbe?si=x")
            '37i9dQZF1DX4UtSsGT1Sbe'
            >>> SpotifyClient.extract_playlist_id("spotify:playlist:37i9dQZF1DX4UtSsGT1Sbe")
            '37i9dQZF1DX4UtSsGT1Sbe'
        """
        url = url.strip()

        if url.startswith("spotify:"):
            parts = url.split(":")
            if len(parts) == 3 and parts[1] == "playlist" and _PLAYLIST_ID.match(parts[2]):
                return parts[2]

        elif url.startswith("http"):
            parts = [p for p in urlparse(url).path.split("/") if p]
            # Localized links look like /intl-de/playlist/ID
            if "playlist" in parts:
                index = parts.index("playlist")
                if index + 1 < len(parts) and _PLAYLIST_ID.match(parts[index + 1]):
                    return parts[index + 1]

        elif _PLAYLIST_ID.match(url):
            return url

        raise ValueError(
            f"Could not extract playlist ID from: {url}\n"
            "Expected format: ID, spotify:playlist:ID, or https://open.spotify.com/playlist/ID"
        )


def track_from_item(item: dict[str, Any]) -> TrackRecord:
    """
    Map a playlist item from the Web API to a TrackRecord.

    Args:
        item: Playlist item with a non-null ``track`` that has an ``album``.

    Returns:
        Normalized TrackRecord.
    """
    track = item["track"]
    album = track.get("album") or {}
    external_urls = track.get("external_urls") or {}
    return TrackRecord(
        title=normalize_title(track.get("name")),
        artist=join_artists(artist.get("name") for artist in track.get("artists") or []),
        year=release_year(album.get("release_date")),
        link=external_urls.get("spotify") or "",
    )
