"""Shared fixtures for radar tests."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import pytest

from radar.models import MarketRecord

HOUR_MS = 3600 * 1000
BASE_TS = 1_704_067_200_000  # 2024-01-01T00:00:00Z

HEADER = ",".join(f"col{i}" for i in range(38))


def build_row(values: Optional[Dict[int, str]] = None, width: int = 38) -> str:
    """A CSV row with the stable leading fields filled and blanks elsewhere."""
    fields = [""] * width
    fields[0] = "2024-01-01T00:00:00Z"
    fields[1] = "0.001"
    fields[2] = "500000"
    fields[3] = "1000000"
    for index, token in (values or {}).items():
        fields[index] = token
    return ",".join(fields)


def build_record(timestamp: int, price: float = 1.0, **overrides) -> MarketRecord:
    data = {
        "timestamp": timestamp,
        "price": price,
        "market_cap": price * 1_000_000,
        "volume": 1_000.0,
        "rsi": 50.0,
        "ema_6h": price,
        "ma_6h": price,
        "ema_24h": price,
        "ma_24h": price,
        "bollinger_upper": price + 0.02,
        "bollinger_lower": price - 0.02,
    }
    data.update(overrides)
    return MarketRecord(**data)


@pytest.fixture
def row_factory() -> Callable[..., str]:
    return build_row


@pytest.fixture
def record_factory() -> Callable[..., MarketRecord]:
    return build_record


@pytest.fixture
def hourly_series() -> Callable[..., List[MarketRecord]]:
    """Build ``count`` hourly records from a list of prices or a constant."""

    def make(count: int, prices: Optional[List[float]] = None, start: int = BASE_TS, **overrides) -> List[MarketRecord]:
        values = prices or [1.0] * count
        return [build_record(start + i * HOUR_MS, values[i], **overrides) for i in range(count)]

    return make


@pytest.fixture
def csv_payload() -> Callable[[List[str]], str]:
    def make(rows: List[str]) -> str:
        return "\n".join([HEADER, *rows]) + "\n"

    return make
