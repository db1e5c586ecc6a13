from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import httpx

from radar.config import Settings

logger = logging.getLogger(__name__)


class SeriesSource(Protocol):
    name: str

    async def fetch_text(self, client: httpx.AsyncClient, symbol: str) -> str: ...


class HttpCsvSource:
    """Ticker CSVs served over HTTP as ``{base_url}/{symbol}.csv``."""

    name = "http"

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    async def fetch_text(self, client: httpx.AsyncClient, symbol: str) -> str:
        url = f"{self.base_url}/{symbol}.csv"
        resp = await client.get(url)
        resp.raise_for_status()
        logger.info("Fetched %s bytes for %s from %s", len(resp.content), symbol, url)
        return resp.text


class LocalCsvSource:
    """Ticker CSVs in a local directory, one ``{symbol}.csv`` per coin."""

    name = "local"

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    async def fetch_text(self, client: httpx.AsyncClient, symbol: str) -> str:
        path = self.directory / f"{symbol}.csv"
        text = path.read_text(encoding="utf-8", errors="replace")
        logger.info("Read %s characters for %s from %s", len(text), symbol, path)
        return text


def default_source(config: Settings) -> SeriesSource:
    """HTTP when ``TICKER_DATA_URL`` is set, otherwise the local ticker directory."""
    if config.ticker_data_url:
        return HttpCsvSource(config.ticker_data_url)
    return LocalCsvSource(config.ticker_data_dir)
