from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

from radar.analytics.stats import summarize
from radar.analytics.timeframe import TimeFrame, filter_by_time_frame
from radar.coins import find_coin
from radar.config import settings
from radar.errors import SeriesLoadError, UnknownSymbol
from radar.ingestion.loader import SeriesLoader, build_loader
from radar.ingestion.synthetic import generate_synthetic_series
from radar.models import CoinDescriptor, MarketRecord, SeriesLoad, StatsSummary

logger = logging.getLogger(__name__)

NO_ROWS = "no_rows"

SyntheticGenerator = Callable[[str, int], List[MarketRecord]]


def resolve_coin(query: str) -> CoinDescriptor:
    """Look the query up in the coin directory before any fetch is attempted."""
    coin = find_coin(query)
    if coin is None:
        raise UnknownSymbol(f"{query} is not available. Try one of the suggested coins.", symbol=query)
    return coin


async def load_with_fallback(
    loader: SeriesLoader,
    coin: CoinDescriptor,
    synthetic_days: int,
    generator: SyntheticGenerator = generate_synthetic_series,
) -> SeriesLoad:
    """Load real data for ``coin``, substituting a synthetic series on failure.

    The result always says whether synthetic data is in use.
    """
    failure: Optional[str] = None
    try:
        records = await loader.load(coin.symbol)
    except SeriesLoadError as exc:
        logger.warning("Load failed for %s (%s): %s", coin.symbol, exc.kind, exc.message)
        failure = exc.kind
    else:
        if records:
            return SeriesLoad(
                coin=coin,
                records=records,
                notice=f"{coin.display_name} ({coin.symbol}) data loaded successfully with {len(records)} data points.",
            )
        logger.warning("Load for %s produced no usable rows", coin.symbol)
        failure = NO_ROWS

    return SeriesLoad(
        coin=coin,
        records=generator(coin.symbol, synthetic_days),
        using_synthetic=True,
        notice=f"Could not load real data for {coin.symbol}, using generated data instead.",
        failure=failure,
    )


class RadarSession:
    """Current coin, its series and the selected time frame.

    A new ``select`` cancels any load still in flight, so a slow response for
    an older request can never replace the result of a newer one. The
    superseded caller sees ``asyncio.CancelledError``.
    """

    def __init__(
        self,
        loader: SeriesLoader,
        time_frame: TimeFrame = TimeFrame.ALL,
        synthetic_days: int = 180,
        generator: SyntheticGenerator = generate_synthetic_series,
    ) -> None:
        self.loader = loader
        self.time_frame = time_frame
        self.synthetic_days = synthetic_days
        self.generator = generator
        self.current: Optional[SeriesLoad] = None
        self._inflight: Optional[asyncio.Task] = None

    async def select(self, query: str) -> SeriesLoad:
        coin = resolve_coin(query)

        if self._inflight is not None and not self._inflight.done():
            logger.info("Cancelling superseded load")
            self._inflight.cancel()

        task = asyncio.create_task(load_with_fallback(self.loader, coin, self.synthetic_days, self.generator))
        self._inflight = task
        result = await task
        if self._inflight is task:
            self.current = result
        return result

    def set_time_frame(self, value: TimeFrame | str) -> TimeFrame:
        self.time_frame = value if isinstance(value, TimeFrame) else TimeFrame.parse(value)
        return self.time_frame

    @property
    def filtered(self) -> List[MarketRecord]:
        if self.current is None:
            return []
        return filter_by_time_frame(self.current.records, self.time_frame)

    def stats(self) -> Optional[StatsSummary]:
        records = self.filtered
        return summarize(records) if records else None


def build_session() -> RadarSession:
    """Create a session with default settings and loader."""
    return RadarSession(
        loader=build_loader(),
        time_frame=TimeFrame.parse(settings.default_time_frame),
        synthetic_days=settings.synthetic_days,
    )
