from __future__ import annotations

import logging
import time
import zlib
from typing import List, Optional

import numpy as np

from radar.models import MarketRecord

logger = logging.getLogger(__name__)

HOUR_MS = 3600 * 1000
LIFECYCLE_CYCLE_DAYS = 30


def _lifecycle_for_day(day_index: int) -> str:
    phase = day_index % LIFECYCLE_CYCLE_DAYS
    if phase < 7:
        return "pre-pump"
    if phase < 14:
        return "pump"
    if phase < 21:
        return "post-pump"
    return "consolidation"


def generate_synthetic_series(
    symbol: str,
    days: int = 180,
    end: Optional[int] = None,
    seed: Optional[int] = None,
) -> List[MarketRecord]:
    """Hourly stand-in series used when a coin's real data cannot be loaded.

    The last record sits at ``end`` (epoch ms, default now). Randomness is
    seeded from the symbol unless ``seed`` is given.
    """
    count = max(days, 0) * 24
    if count == 0:
        return []

    rng = np.random.default_rng(seed if seed is not None else zlib.crc32(symbol.upper().encode("utf-8")))
    end_ms = int(time.time() * 1000) if end is None else end
    start_ms = end_ms - (count - 1) * HOUR_MS

    steps = np.arange(count)
    monthly = np.sin(steps / (24 * 30)) * 0.3
    daily = np.sin(steps / 24) * 0.1
    noise = rng.uniform(-0.05, 0.05, count)
    prices = rng.uniform(1e-6, 1e-5) * np.cumprod(1 + (monthly + daily + noise) * 0.1)
    volumes = rng.uniform(1e8, 1e9) * np.cumprod(1 + rng.uniform(-0.1, 0.1, count))
    rsi = np.clip(30 + np.sin(steps / 20) * 20 + np.cos(steps / 7) * 10 + rng.uniform(0, 20, count), 0, 100)
    whales = np.where(rng.random(count) > 0.9, rng.integers(1, 6, count), 0)

    records: List[MarketRecord] = []
    for i in range(count):
        price = float(prices[i])
        volume = float(volumes[i])
        records.append(
            MarketRecord(
                timestamp=start_ms + i * HOUR_MS,
                price=price,
                market_cap=price * volume * 10,
                volume=volume,
                rsi=float(rsi[i]),
                ema_6h=price * (1 + rng.uniform(-0.015, 0.015)),
                ma_6h=price * (1 + rng.uniform(-0.01, 0.01)),
                ema_24h=price * (1 + rng.uniform(-0.02, 0.02)),
                ma_24h=price * (1 + rng.uniform(-0.005, 0.005)),
                bollinger_upper=price * (1.05 + rng.uniform(0, 0.02)),
                bollinger_lower=price * (0.95 - rng.uniform(0, 0.02)),
                whale_transactions=int(whales[i]),
                lifecycle_stage=_lifecycle_for_day(i // 24),
                rolling_high_24h=price * 1.1,
                rolling_low_24h=price * 0.9,
            )
        )

    logger.info("Generated %s synthetic records for %s", len(records), symbol)
    return records
