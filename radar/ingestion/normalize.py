"""Coercion of raw CSV tokens into numbers, flags and epoch milliseconds.

Every helper here is total: bad input yields a fallback value or ``None``,
never an exception.
"""

from __future__ import annotations

import math
import re
from typing import Optional

import pandas as pd

_TRUE_TOKENS = frozenset({"true", "1"})
_BOOLEAN_TOKENS = frozenset({"true", "false", "1", "0"})
_DATE_DELIMITERS = re.compile(r"[-\s:]+")
_YEAR = re.compile(r"(?<!\d)\d{4}(?!\d)")


def parse_float(token: Optional[str]) -> Optional[float]:
    """Return the token as a finite float, or ``None``."""
    if token is None:
        return None
    text = token.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_numeric(token: Optional[str], fallback: float) -> float:
    value = parse_float(token)
    return fallback if value is None else value


def parse_booleanish(token: Optional[str]) -> bool:
    return (token or "").strip().lower() in _TRUE_TOKENS


def is_booleanish(token: Optional[str]) -> bool:
    return (token or "").strip().lower() in _BOOLEAN_TOKENS


def _to_epoch_ms(text: str) -> Optional[int]:
    try:
        stamp = pd.to_datetime(text, utc=True, errors="coerce")
        if stamp is None or pd.isna(stamp):
            return None
        # .value is in nanoseconds and overflows outside 1677-2262.
        millis = round(stamp.timestamp() * 1000)
    except (ValueError, TypeError, OverflowError):
        return None
    return millis if millis >= 0 else None


def _rebuild_iso(token: str) -> Optional[str]:
    """Reassemble delimiter-split date parts as ``YYYY-MM-DD[THH:MM[:SS]]``.

    Year-first input keeps its order. When the year comes third the first two
    parts are read month/day, or day/month if the first one cannot be a month.
    """
    parts = [part for part in _DATE_DELIMITERS.split(token.strip()) if part]
    if len(parts) < 3 or not all(part.isdigit() for part in parts):
        return None

    if len(parts[0]) == 4:
        year, month, day = parts[0], parts[1], parts[2]
    elif len(parts[2]) == 4:
        year = parts[2]
        if int(parts[0]) <= 12:
            month, day = parts[0], parts[1]
        else:
            month, day = parts[1], parts[0]
    else:
        return None

    rebuilt = f"{year}-{int(month):02d}-{int(day):02d}"
    clock = parts[3:6]
    if clock:
        while len(clock) < 2:
            clock.append("0")
        rebuilt += "T" + ":".join(f"{int(part):02d}" for part in clock)
    return rebuilt


def parse_timestamp(token: Optional[str]) -> Optional[int]:
    """Parse a date-time token to epoch milliseconds.

    Returns ``None`` when the token carries no four-digit year, or when neither
    the direct parse nor the rebuilt ``YYYY-MM-DD`` form yields a valid instant;
    callers drop the row. Naive inputs are read as UTC.
    """
    text = (token or "").strip()
    # pandas fills a missing date with today, e.g. for a bare "12:30".
    if not text or not _YEAR.search(text):
        return None

    # All-numeric tokens are unambiguous once rebuilt year-first.
    rebuilt = _rebuild_iso(text)
    if rebuilt is not None:
        millis = _to_epoch_ms(rebuilt)
        if millis is not None:
            return millis
    return _to_epoch_ms(text)
