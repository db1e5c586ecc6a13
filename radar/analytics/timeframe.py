from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from radar.models import MarketRecord

HOUR_MS = 3600 * 1000
DAY_MS = 24 * HOUR_MS


class TimeFrame(str, Enum):
    """Trailing windows offered by the time-frame selector."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    ONE_YEAR = "1Y"
    ALL = "ALL"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TimeFrame":
        """Map a raw token to a time frame; anything unrecognised is ``ALL``."""
        token = (value or "").strip().upper()
        for frame in cls:
            if frame.value == token:
                return frame
        return cls.ALL

    @property
    def duration_ms(self) -> Optional[int]:
        days = {
            "1D": 1,
            "1W": 7,
            "1M": 30,
            "3M": 90,
            "1Y": 365,
        }.get(self.value)
        return None if days is None else days * DAY_MS

    @property
    def fallback_count(self) -> Optional[int]:
        """Trailing record count used when the window is empty.

        Assumes roughly hourly samples; ``None`` means keep the whole series.
        """
        return {"1D": 24, "1W": 168, "1M": 720}.get(self.value)


def _ascending(series: Sequence[MarketRecord]) -> List[MarketRecord]:
    return sorted(series, key=lambda record: record.timestamp)


def filter_by_time_frame(series: Sequence[MarketRecord], window: TimeFrame | str) -> List[MarketRecord]:
    """Slice ``series`` to ``window`` measured back from its newest timestamp.

    The anchor is the data's own latest instant rather than the wall clock, so
    historical files still show data. When the window holds nothing but the
    series is not empty, a trailing slice is returned instead.
    """
    frame = window if isinstance(window, TimeFrame) else TimeFrame.parse(window)
    ordered = _ascending(series)
    if not ordered or frame.duration_ms is None:
        return ordered

    reference = ordered[-1].timestamp
    cutoff = reference - frame.duration_ms
    windowed = [record for record in ordered if record.timestamp >= cutoff]
    if windowed:
        return windowed

    count = frame.fallback_count
    if count is None:
        return ordered
    return ordered[-min(len(ordered), count):]
