from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from radar.ingestion.columns import resolve_columns
from radar.ingestion.normalize import parse_numeric, parse_timestamp
from radar.models import MarketRecord

logger = logging.getLogger(__name__)

FIELD_DELIMITER = ","
TIMESTAMP_INDEX = 0
PRICE_INDEX = 1
MARKET_CAP_INDEX = 2
VOLUME_INDEX = 3


@dataclass
class ParseReport:
    """Accepted records plus how many data rows were dropped."""

    records: List[MarketRecord] = field(default_factory=list)
    rejected: int = 0


def _amount(token: str) -> float:
    value = parse_numeric(token, 0.0)
    return value if value >= 0 else 0.0


def _build_record(fields: List[str], min_fields: int) -> Optional[MarketRecord]:
    if len(fields) < min_fields:
        return None

    timestamp = parse_timestamp(fields[TIMESTAMP_INDEX])
    if timestamp is None:
        return None

    price = _amount(fields[PRICE_INDEX])
    market_cap = _amount(fields[MARKET_CAP_INDEX])
    volume = _amount(fields[VOLUME_INDEX])
    resolved = resolve_columns(fields, price)

    return MarketRecord(
        timestamp=timestamp,
        price=price,
        market_cap=market_cap,
        volume=volume,
        rsi=resolved.rsi,
        ema_6h=resolved.ema_6h,
        ma_6h=resolved.ma_6h,
        ema_24h=resolved.ema_24h,
        ma_24h=resolved.ma_24h,
        volatility=resolved.volatility,
        bollinger_upper=price + 2 * resolved.volatility,
        bollinger_lower=price - 2 * resolved.volatility,
        whale_transactions=resolved.whale_transactions,
        forecast_price=resolved.forecast_price,
        lifecycle_stage=resolved.lifecycle_stage,
        rolling_high_24h=resolved.rolling_high_24h,
        rolling_low_24h=resolved.rolling_low_24h,
    )


def parse_row(line: str, min_fields: int) -> Optional[MarketRecord]:
    """Turn one CSV line into a record, or ``None`` if the row must be dropped."""
    fields = line.rstrip("\r").split(FIELD_DELIMITER)
    try:
        return _build_record(fields, min_fields)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Dropping unparsable row %r: %s", line[:80], exc)
        return None


def parse_rows(text: str, min_fields: int) -> ParseReport:
    """Parse every data row of a CSV payload; the header line is skipped."""
    report = ParseReport()
    lines = text.strip().splitlines()
    for line in lines[1:]:
        if not line.strip():
            continue
        record = parse_row(line, min_fields)
        if record is None:
            report.rejected += 1
        else:
            report.records.append(record)

    if report.rejected:
        logger.info("Parsed %s rows, rejected %s", len(report.records), report.rejected)
    return report
