from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from radar.config import settings
from radar.errors import SourceEmpty, SourceUnavailable
from radar.ingestion.parser import parse_rows
from radar.ingestion.sources import SeriesSource, default_source
from radar.models import MarketRecord

logger = logging.getLogger(__name__)


class SeriesLoader:
    """Fetches one coin's CSV and turns it into an ascending record series.

    Failures are raised, never papered over with synthetic data; that choice
    belongs to the caller.
    """

    def __init__(
        self,
        source: SeriesSource,
        request_timeout_seconds: float,
        min_field_count: int,
        min_payload_length: int,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.source = source
        self.request_timeout_seconds = request_timeout_seconds
        self.min_field_count = min_field_count
        self.min_payload_length = min_payload_length
        self.transport = transport

    async def _fetch(self, symbol: str) -> str:
        timeout = httpx.Timeout(self.request_timeout_seconds)
        try:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=self.transport) as client:
                return await self.source.fetch_text(client, symbol)
        except httpx.HTTPError as exc:
            raise SourceUnavailable(f"Failed to fetch {symbol} data: {exc}", symbol=symbol) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailable(f"Failed to read {symbol} data: {exc}", symbol=symbol) from exc

    async def load(self, symbol: str) -> List[MarketRecord]:
        """Return the parsed series for ``symbol``, sorted by timestamp.

        Raises ``SourceUnavailable`` or ``SourceEmpty``. An empty list means the
        source answered but every row was rejected.
        """
        text = await self._fetch(symbol)
        if len(text.strip()) < self.min_payload_length:
            raise SourceEmpty(
                f"Source for {symbol} returned {len(text)} characters, nothing to parse", symbol=symbol
            )

        report = parse_rows(text, self.min_field_count)
        records = sorted(report.records, key=lambda record: record.timestamp)
        logger.info(
            "Loaded %s records for %s via %s (%s rows rejected)",
            len(records),
            symbol,
            self.source.name,
            report.rejected,
        )
        return records


def build_loader(source: Optional[SeriesSource] = None) -> SeriesLoader:
    """Create a loader with default settings and source."""
    return SeriesLoader(
        source=source or default_source(settings),
        request_timeout_seconds=settings.request_timeout_seconds,
        min_field_count=settings.min_field_count,
        min_payload_length=settings.min_payload_length,
    )
