"""Tests for the synthetic fallback series."""

from radar.analytics.stats import calculate_score
from radar.ingestion.synthetic import HOUR_MS, generate_synthetic_series

END_MS = 1_717_200_000_000


def test_hourly_ascending_and_ends_at_anchor():
    series = generate_synthetic_series("BONK", days=3, end=END_MS)

    assert len(series) == 72
    assert series[-1].timestamp == END_MS
    assert all(b.timestamp - a.timestamp == HOUR_MS for a, b in zip(series, series[1:]))


def test_same_symbol_gives_same_series():
    first = generate_synthetic_series("bonk", days=2, end=END_MS)
    second = generate_synthetic_series("BONK", days=2, end=END_MS)
    assert first == second


def test_records_respect_invariants():
    series = generate_synthetic_series("PEPE", days=40, end=END_MS)

    assert all(record.price > 0 for record in series)
    assert all(0 <= record.rsi <= 100 for record in series)
    assert all(record.rolling_high_24h >= record.rolling_low_24h for record in series)
    assert {record.lifecycle_stage for record in series} == {"pre-pump", "pump", "post-pump", "consolidation"}
    assert 0 <= calculate_score(series) <= 5


def test_zero_days_is_empty():
    assert generate_synthetic_series("PEPE", days=0, end=END_MS) == []
