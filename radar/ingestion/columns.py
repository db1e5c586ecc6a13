"""Locate indicator fields in rows whose column order drifts between files.

Only timestamp, price, market cap and volume sit at fixed positions. The
remaining fields are looked up in a small index window and the first token
that passes the field's predicate wins; later plausible tokens are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from radar.ingestion.normalize import is_booleanish, parse_booleanish, parse_float, parse_numeric

LIFECYCLE_KEYWORDS: Tuple[str, ...] = ("pump", "dump", "growth", "decline", "consolidation")

EMA_6H_INDEX = 18
EMA_24H_INDEX = 19
MA_6H_INDEX = 20
MA_24H_INDEX = 21
ROLLING_HIGH_INDEX = 34
ROLLING_LOW_INDEX = 35

DEFAULT_RSI = 50.0
DEFAULT_VOLATILITY = 0.01
ROLLING_HIGH_FALLBACK = 1.05
ROLLING_LOW_FALLBACK = 0.95


@dataclass(frozen=True)
class FieldRule:
    """Where to look for a field and how to recognise it."""

    name: str
    indices: Tuple[int, ...]
    predicate: Callable[[str], bool]
    convert: Callable[[str], Any]
    default: Any = None


def _numeric_between(low: float, high: float, *, inclusive: bool) -> Callable[[str], bool]:
    def check(token: str) -> bool:
        value = parse_float(token)
        if value is None:
            return False
        if inclusive:
            return low <= value <= high
        return low < value < high

    return check


def _positive_number(token: str) -> bool:
    value = parse_float(token)
    return value is not None and value > 0


def _has_lifecycle_keyword(token: str) -> bool:
    text = token.strip().lower()
    return bool(text) and any(keyword in text for keyword in LIFECYCLE_KEYWORDS)


def _whale_flag(token: str) -> int:
    return 1 if parse_booleanish(token) else 0


RSI_RULE = FieldRule(
    name="rsi",
    indices=tuple(range(29, 36)),
    predicate=_numeric_between(0.0, 100.0, inclusive=True),
    convert=float,
    default=DEFAULT_RSI,
)
VOLATILITY_RULE = FieldRule(
    name="volatility",
    indices=tuple(range(24, 29)),
    predicate=_numeric_between(0.0, 1.0, inclusive=False),
    convert=float,
    default=DEFAULT_VOLATILITY,
)
WHALE_RULE = FieldRule(
    name="whale_transactions",
    indices=tuple(range(30, 35)),
    predicate=is_booleanish,
    convert=_whale_flag,
    default=0,
)
FORECAST_RULE = FieldRule(
    name="forecast_price",
    indices=tuple(range(36, 39)),
    predicate=_positive_number,
    convert=float,
    default=None,
)

WINDOW_RULES: Tuple[FieldRule, ...] = (RSI_RULE, VOLATILITY_RULE, WHALE_RULE, FORECAST_RULE)

# Lifecycle labels trail the row; scan backwards over this many fields.
LIFECYCLE_TAIL = 5
LIFECYCLE_MIN_INDEX = 4


def first_plausible(fields: Sequence[str], rule: FieldRule) -> Tuple[Any, Optional[int]]:
    """Return ``(value, index)`` for the first index in the rule's window that
    passes its predicate, or ``(rule.default, None)``.

    Indices beyond the row are skipped.
    """
    for index in rule.indices:
        if index >= len(fields):
            continue
        token = fields[index]
        if rule.predicate(token):
            return rule.convert(token), index
    return rule.default, None


def lifecycle_rule(field_count: int) -> FieldRule:
    start = field_count - 1
    stop = max(LIFECYCLE_MIN_INDEX, field_count - LIFECYCLE_TAIL) - 1
    return FieldRule(
        name="lifecycle_stage",
        indices=tuple(range(start, stop, -1)),
        predicate=_has_lifecycle_keyword,
        convert=lambda token: token.strip().lower(),
        default=None,
    )


def indicator_at(fields: Sequence[str], index: int, fallback: float) -> float:
    token = fields[index] if index < len(fields) else None
    return parse_numeric(token, fallback)


def rolling_bounds(fields: Sequence[str], price: float) -> Tuple[float, float]:
    """24h rolling high and low, falling back to ±5% of price, never inverted."""
    high = indicator_at(fields, ROLLING_HIGH_INDEX, price * ROLLING_HIGH_FALLBACK)
    low = indicator_at(fields, ROLLING_LOW_INDEX, price * ROLLING_LOW_FALLBACK)
    if high < low:
        return low, high
    return high, low


@dataclass(frozen=True)
class ResolvedColumns:
    rsi: float
    volatility: float
    whale_transactions: int
    forecast_price: Optional[float]
    lifecycle_stage: Optional[str]
    ema_6h: float
    ema_24h: float
    ma_6h: float
    ma_24h: float
    rolling_high_24h: float
    rolling_low_24h: float
    # Index each window-scanned field came from; None means the default was used.
    found_at: Dict[str, Optional[int]] = field(default_factory=dict)


def resolve_columns(fields: Sequence[str], price: float) -> ResolvedColumns:
    values: Dict[str, Any] = {}
    found_at: Dict[str, Optional[int]] = {}
    for rule in (*WINDOW_RULES, lifecycle_rule(len(fields))):
        values[rule.name], found_at[rule.name] = first_plausible(fields, rule)

    high, low = rolling_bounds(fields, price)
    return ResolvedColumns(
        rsi=values["rsi"],
        volatility=values["volatility"],
        whale_transactions=values["whale_transactions"],
        forecast_price=values["forecast_price"],
        lifecycle_stage=values["lifecycle_stage"],
        ema_6h=indicator_at(fields, EMA_6H_INDEX, price),
        ema_24h=indicator_at(fields, EMA_24H_INDEX, price),
        ma_6h=indicator_at(fields, MA_6H_INDEX, price),
        ma_24h=indicator_at(fields, MA_24H_INDEX, price),
        rolling_high_24h=high,
        rolling_low_24h=low,
        found_at=found_at,
    )
