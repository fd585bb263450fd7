"""Exception types raised while generating song cards."""


class SongCardsError(Exception):
    """Base class for all songcards errors."""


class ConfigurationError(SongCardsError, ValueError):
    """Layout or theme configuration is invalid (detected before drawing)."""


class UpstreamFetchError(SongCardsError, ConnectionError):
    """The music catalog could not be reached or returned an unusable response."""


class EncodingError(SongCardsError):
    """A scannable code image could not be generated."""


class DrawingError(SongCardsError):
    """The drawing surface rejected an operation (bad image bytes, bad font file)."""
