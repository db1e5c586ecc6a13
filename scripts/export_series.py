from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

import pandas as pd

from radar.config import settings
from radar.errors import SeriesLoadError, UnknownSymbol
from radar.ingestion.loader import build_loader
from radar.ingestion.pipeline import resolve_coin

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export a coin's normalized series to CSV.")
    parser.add_argument("symbol", type=str, help="Coin symbol or name, case-insensitive.")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Destination CSV path (default: data/export/<SYMBOL>_normalized.csv).",
    )
    return parser.parse_args()


async def main() -> int:
    args = parse_args()
    try:
        symbol = resolve_coin(args.symbol).symbol
    except UnknownSymbol as exc:
        logger.error(exc.message)
        return 1
    output = args.output or settings.export_dir / f"{symbol}_normalized.csv"

    try:
        records = await build_loader().load(symbol)
    except SeriesLoadError as exc:
        logger.error("Export aborted (%s): %s", exc.kind, exc.message)
        return 1

    df = pd.DataFrame([r.model_dump() for r in records])
    if not df.empty:
        df.insert(1, "as_of", pd.to_datetime(df["timestamp"], unit="ms", utc=True))
    output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output, index=False)
    logger.info("Export complete: %s rows -> %s", len(df), output)
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
