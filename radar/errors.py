"""Error taxonomy for loading coin series."""

from __future__ import annotations


class RadarError(Exception):
    """Base error for the radar package."""

    def __init__(self, message: str, symbol: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.symbol = symbol


class SeriesLoadError(RadarError):
    """A series could not be loaded from its source."""

    kind = "load_error"


class SourceUnavailable(SeriesLoadError):
    """Transport failure, timeout, missing file or non-success response."""

    kind = "source_unavailable"


class SourceEmpty(SeriesLoadError):
    """The source answered but the payload is too short to hold any rows."""

    kind = "source_empty"


class UnknownSymbol(RadarError):
    """The requested symbol is not in the coin directory."""
