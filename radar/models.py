from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CoinDescriptor(BaseModel):
    """Static reference entry for a coin the dashboard can load."""

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., description="Ticker symbol (upper-case).")
    display_name: str = Field(..., description="Human readable name.")
    icon_glyph: str = Field(..., description="Emoji shown next to the name.")


class MarketRecord(BaseModel):
    """One normalized, time-stamped market sample."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., ge=0, description="Milliseconds since the epoch (UTC).")
    price: float = Field(0.0, description="Last traded price in USD.")
    market_cap: float = Field(0.0, description="Market capitalization in USD.")
    volume: float = Field(0.0, description="Trading volume in USD.")
    rsi: float = Field(50.0, description="Relative strength index, neutral 50 when unknown.")
    ema_6h: float
    ma_6h: float
    ema_24h: float
    ma_24h: float
    volatility: float = Field(0.01, description="Volatility used for the Bollinger bands.")
    bollinger_upper: float
    bollinger_lower: float
    whale_transactions: int = Field(0, ge=0, description="Whale transaction count or 0/1 flag.")
    forecast_price: Optional[float] = Field(
        None, description="Forward-looking price projection; null when the row carries none."
    )
    lifecycle_stage: Optional[str] = Field(None, description="Market phase label such as 'pump'.")
    rolling_high_24h: Optional[float] = None
    rolling_low_24h: Optional[float] = None


class SeriesLoad(BaseModel):
    """Outcome of loading one coin for display."""

    coin: CoinDescriptor
    records: List[MarketRecord] = Field(default_factory=list)
    using_synthetic: bool = False
    notice: Optional[str] = Field(None, description="User-facing message about how the data was obtained.")
    failure: Optional[str] = Field(None, description="Failure kind that triggered the synthetic fallback.")


class StatsSummary(BaseModel):
    """Derived scalars shown next to the charts."""

    high_24h: float
    low_24h: float
    market_cap: float
    volume: float
    market_cap_change: str
    volume_change: str
    whale_transactions_24h: int
    score: int = Field(..., ge=0, le=5)
    score_label: str
    whale_label: str
    lifecycle_stage: Optional[str] = None


class StatsResponse(BaseModel):
    """Stats for one coin plus the pre-formatted strings the panel prints."""

    coin: CoinDescriptor
    time_frame: str
    using_synthetic: bool
    notice: Optional[str] = None
    summary: StatsSummary
    display: Dict[str, str] = Field(default_factory=dict)
