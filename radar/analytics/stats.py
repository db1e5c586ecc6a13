"""Summary statistics, the Boom or Doom score and display formatting."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from radar.models import MarketRecord, StatsSummary

logger = logging.getLogger(__name__)

# "Last 24 records" stands in for "last 24 hours" throughout; samples are
# assumed to be roughly hourly.
TRAILING_RECORDS = 24


@dataclass(frozen=True)
class ScoreWeights:
    """Constants of the Boom or Doom heuristic."""

    price_change: float = 2.0
    volume_change: float = 1.0
    whale: float = 0.2
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0
    offset: float = 3.0
    scale: float = 5 / 6
    max_score: int = 5


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _relative_change(old: float, new: float) -> float:
    return (new - old) / old if old != 0 else 0.0


def get_24h_high_low(series: Sequence[MarketRecord]) -> Tuple[float, float]:
    if not series:
        return 0.0, 0.0

    latest = series[-1]
    if latest.rolling_high_24h is not None and latest.rolling_low_24h is not None:
        return latest.rolling_high_24h, latest.rolling_low_24h

    prices = [record.price for record in series[-TRAILING_RECORDS:]]
    return max(prices), min(prices)


def get_percentage_change(old_value: float, new_value: float) -> str:
    """Signed percentage change, ``"0.00%"`` when the old value is zero."""
    if old_value == 0:
        return "0.00%"
    change = (new_value - old_value) / old_value * 100
    if not math.isfinite(change):
        return "0.00%"
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.2f}%"


def whale_activity_24h(series: Sequence[MarketRecord]) -> int:
    return sum(record.whale_transactions for record in series[-TRAILING_RECORDS:])


def calculate_score(series: Sequence[MarketRecord], weights: ScoreWeights = ScoreWeights()) -> int:
    """Boom or Doom score from the trailing 24 records, 0 (doom) to 5 (boom).

    Series shorter than 24 records score 0.
    """
    if len(series) < TRAILING_RECORDS:
        return 0

    recent = series[-TRAILING_RECORDS:]
    first, latest = recent[0], recent[-1]

    price_change = _relative_change(first.price, latest.price)
    volume_change = _relative_change(first.volume, latest.volume)

    rsi = latest.rsi or 50.0
    rsi_score = -1 if rsi > weights.rsi_overbought or rsi < weights.rsi_oversold else 1

    whales = sum(record.whale_transactions for record in recent)

    if latest.price > 0 and latest.ema_6h > 0:
        ema_relation = 1 if latest.price > latest.ema_6h else -1
    else:
        ema_relation = 0

    lifecycle_bonus = 1 if latest.lifecycle_stage and "pump" in latest.lifecycle_stage else 0

    raw = (
        price_change * weights.price_change
        + rsi_score
        + volume_change * weights.volume_change
        + whales * weights.whale
        + ema_relation
        + lifecycle_bonus
    )
    normalized = (raw + weights.offset) * weights.scale
    if not math.isfinite(normalized):
        logger.warning("Score is not finite (raw=%s), reporting 0", raw)
        return 0
    return max(0, min(_round_half_up(normalized), weights.max_score))


def score_label(score: int) -> str:
    return {
        5: "🚀 TO THE MOON!",
        4: "Looking very bullish!",
        3: "Cautiously optimistic",
        2: "Neutral territory",
        1: "Proceed with caution",
    }.get(score, "Danger zone! ⚠️")


def whale_label(count: int) -> str:
    if count > 3:
        return "High whale activity! 🐋"
    if count > 0:
        return "Some whales moving 🐋"
    return "No whale activity 🦐"


def rsi_condition(rsi: float) -> str:
    if rsi >= 70:
        return "Overbought"
    if rsi <= 30:
        return "Oversold"
    return "Neutral"


def summarize(series: Sequence[MarketRecord], weights: ScoreWeights = ScoreWeights()) -> StatsSummary:
    """Everything the stats panel shows for a (non-empty) series."""
    if not series:
        raise ValueError("Cannot summarize an empty series")

    latest = series[-1]
    previous = series[max(0, len(series) - TRAILING_RECORDS - 1)]
    high, low = get_24h_high_low(series)
    whales = whale_activity_24h(series)
    score = calculate_score(series, weights)

    return StatsSummary(
        high_24h=high,
        low_24h=low,
        market_cap=latest.market_cap,
        volume=latest.volume,
        market_cap_change=get_percentage_change(previous.market_cap, latest.market_cap),
        volume_change=get_percentage_change(previous.volume, latest.volume),
        whale_transactions_24h=whales,
        score=score,
        score_label=score_label(score),
        whale_label=whale_label(whales),
        lifecycle_stage=latest.lifecycle_stage,
    )


def format_number(num: float) -> str:
    """Compact money figure with a B/M/K suffix."""
    if num >= 1_000_000_000:
        return f"{num / 1_000_000_000:.2f}B"
    if num >= 1_000_000:
        return f"{num / 1_000_000:.2f}M"
    if num >= 1_000:
        return f"{num / 1_000:.2f}K"
    return f"{num:.2f}"


def format_price(price: float) -> str:
    """Price with precision scaled to its magnitude; tiny prices go scientific."""
    if price < 0.00001:
        return _exponential(price)
    if price < 0.001:
        return f"{price:.6f}"
    if price < 1:
        return f"{price:.4f}"
    return f"{price:.2f}"


def _exponential(value: float) -> str:
    # Unpadded exponent, e.g. 1.23e-7 rather than 1.23e-07.
    mantissa, exponent = f"{value:.2e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"
