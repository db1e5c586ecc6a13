from __future__ import annotations

import argparse
import asyncio
import json
import logging

from radar.errors import UnknownSymbol
from radar.ingestion.pipeline import build_session

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load one coin's series and print its Boom or Doom stats.")
    parser.add_argument("symbol", help="Coin symbol or name, case-insensitive.")
    parser.add_argument("--time-frame", default=None, help="1D, 1W, 1M, 3M, 1Y or ALL.")
    return parser.parse_args()


async def main() -> int:
    args = parse_args()
    session = build_session()
    if args.time_frame:
        session.set_time_frame(args.time_frame)

    try:
        result = await session.select(args.symbol)
    except UnknownSymbol as exc:
        logger.error(exc.message)
        return 1

    if result.using_synthetic:
        logger.warning("Synthetic data in use for %s (%s)", result.coin.symbol, result.failure)
    stats = session.stats()
    payload = {
        "coin": result.coin.model_dump(),
        "time_frame": session.time_frame.value,
        "records": len(session.filtered),
        "using_synthetic": result.using_synthetic,
        "notice": result.notice,
        "stats": stats.model_dump() if stats else None,
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
