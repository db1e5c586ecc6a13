from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from radar.analytics.stats import format_number, format_price, summarize
from radar.analytics.timeframe import TimeFrame, filter_by_time_frame
from radar.coins import search_coins
from radar.config import settings
from radar.errors import UnknownSymbol
from radar.ingestion.loader import build_loader
from radar.ingestion.pipeline import load_with_fallback, resolve_coin
from radar.models import CoinDescriptor, SeriesLoad, StatsResponse

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Boom or Doom Radar API",
    version="0.1.0",
    description="Meme coin series, stats and Boom or Doom scores.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

loader = build_loader()


async def _load(symbol: str, time_frame: Optional[str]) -> tuple[SeriesLoad, TimeFrame]:
    try:
        coin = resolve_coin(symbol)
    except UnknownSymbol as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc

    frame = TimeFrame.parse(time_frame or settings.default_time_frame)
    result = await load_with_fallback(loader, coin, settings.synthetic_days)
    return result.model_copy(update={"records": filter_by_time_frame(result.records, frame)}), frame


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.get("/coins", response_model=List[CoinDescriptor])
async def list_coins(q: Optional[str] = Query(None, description="Symbol or name fragment")) -> List[CoinDescriptor]:
    return search_coins(q)


@app.get("/series/{symbol}", response_model=SeriesLoad)
async def get_series(
    symbol: str,
    time_frame: Optional[str] = Query(None, description="1D, 1W, 1M, 3M, 1Y or ALL"),
) -> SeriesLoad:
    result, _ = await _load(symbol, time_frame)
    return result


@app.get("/stats/{symbol}", response_model=StatsResponse)
async def get_stats(
    symbol: str,
    time_frame: Optional[str] = Query(None, description="1D, 1W, 1M, 3M, 1Y or ALL"),
) -> StatsResponse:
    result, frame = await _load(symbol, time_frame)
    if not result.records:
        raise HTTPException(status_code=404, detail=f"No data available for {result.coin.symbol}")

    summary = summarize(result.records)
    return StatsResponse(
        coin=result.coin,
        time_frame=frame.value,
        using_synthetic=result.using_synthetic,
        notice=result.notice,
        summary=summary,
        display={
            "high_24h": f"${format_price(summary.high_24h)}",
            "low_24h": f"${format_price(summary.low_24h)}",
            "market_cap": f"${format_number(summary.market_cap)}",
            "volume": f"${format_number(summary.volume)}",
            "latest_price": f"${format_price(result.records[-1].price)}",
        },
    )
