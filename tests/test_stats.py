"""Tests for summary stats, the Boom or Doom score and display formatting."""

import pytest

from radar.analytics.stats import (
    ScoreWeights,
    calculate_score,
    format_number,
    format_price,
    get_24h_high_low,
    get_percentage_change,
    rsi_condition,
    score_label,
    summarize,
    whale_activity_24h,
    whale_label,
)


class TestHighLow:
    def test_prefers_rolling_values_of_latest_record(self, hourly_series, record_factory):
        series = hourly_series(5)
        series.append(record_factory(series[-1].timestamp + 1, 1.0, rolling_high_24h=9.0, rolling_low_24h=0.5))
        assert get_24h_high_low(series) == (9.0, 0.5)

    def test_falls_back_to_trailing_24_prices(self, hourly_series):
        prices = [100.0] + [float(i) for i in range(1, 30)]
        series = hourly_series(30, prices)
        # The 100.0 outlier is outside the trailing 24 records.
        assert get_24h_high_low(series) == (29.0, 6.0)

    def test_empty_series(self):
        assert get_24h_high_low([]) == (0.0, 0.0)


class TestPercentageChange:
    @pytest.mark.parametrize(
        "old,new,expected",
        [(100, 110, "+10.00%"), (100, 100, "+0.00%"), (200, 150, "-25.00%"), (0.5, 1.5, "+200.00%")],
    )
    def test_signed_output(self, old, new, expected):
        assert get_percentage_change(old, new) == expected

    def test_zero_old_value_is_not_infinite(self):
        result = get_percentage_change(0, 100)
        assert result == "0.00%"
        assert "inf" not in result.lower()
        assert "nan" not in result.lower()


class TestCalculateScore:
    """The composite score on the trailing 24 records."""

    @pytest.mark.parametrize("count", [0, 1, 23])
    def test_short_series_scores_zero(self, hourly_series, count):
        assert calculate_score(hourly_series(count)) == 0

    def test_rising_prices_beat_falling_prices(self, hourly_series):
        rising = hourly_series(30, [float(i) for i in range(1, 31)], rsi=50.0)
        falling = hourly_series(30, [float(i) for i in range(30, 0, -1)], rsi=50.0)

        assert calculate_score(rising) > calculate_score(falling)

    def test_flat_neutral_series(self, hourly_series):
        # rsi +1, price equal to EMA counts as below (-1): raw 0 -> round(2.5) = 3.
        assert calculate_score(hourly_series(24)) == 3

    def test_extreme_rsi_and_pump_bonus(self, hourly_series):
        flat = hourly_series(24, rsi=85.0)
        pumping = hourly_series(24, rsi=85.0, lifecycle_stage="post-pump")
        # raw -2 -> round(0.83) = 1; with the pump bonus raw -1 -> round(1.67) = 2.
        assert calculate_score(flat) == 1
        assert calculate_score(pumping) == 2

    def test_whales_push_score_up_and_clamp(self, hourly_series):
        series = hourly_series(24, whale_transactions=5)
        assert calculate_score(series) == 5

    def test_score_is_within_bounds(self, hourly_series):
        crash = hourly_series(24, [1000.0] + [0.001] * 23, rsi=95.0)
        assert 0 <= calculate_score(crash) <= 5

    def test_weights_are_configurable(self, hourly_series):
        series = hourly_series(24, whale_transactions=1)
        assert calculate_score(series, ScoreWeights(whale=0.0)) == 3


class TestSummaries:
    def test_whale_activity_counts_last_24_records(self, hourly_series):
        series = hourly_series(30, whale_transactions=1)
        assert whale_activity_24h(series) == 24

    def test_summarize(self, hourly_series):
        series = hourly_series(30, [float(i) for i in range(1, 31)])
        summary = summarize(series)

        assert summary.market_cap == 30_000_000
        # Compared against the record 24 positions before the latest (price 6 -> 30).
        assert summary.market_cap_change == "+400.00%"
        assert summary.volume_change == "+0.00%"
        assert summary.score == calculate_score(series)
        assert summary.score_label == score_label(summary.score)

    def test_summarize_empty_raises(self):
        with pytest.raises(ValueError):
            summarize([])

    @pytest.mark.parametrize("count,label", [(0, "No whale activity 🦐"), (2, "Some whales moving 🐋"), (4, "High whale activity! 🐋")])
    def test_whale_label(self, count, label):
        assert whale_label(count) == label

    @pytest.mark.parametrize("rsi,condition", [(70, "Overbought"), (30, "Oversold"), (50, "Neutral")])
    def test_rsi_condition(self, rsi, condition):
        assert rsi_condition(rsi) == condition


class TestFormatting:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (2_500_000_000, "2.50B"),
            (1_234_567, "1.23M"),
            (1_500, "1.50K"),
            (999.994, "999.99"),
            (0, "0.00"),
        ],
    )
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.00000123, "1.23e-6"),
            (0.00012345, "0.000123"),
            (0.5, "0.5000"),
            (12.346, "12.35"),
        ],
    )
    def test_format_price(self, value, expected):
        assert format_price(value) == expected
