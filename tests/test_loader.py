"""Tests for the series loader and its sources."""

import httpx
import pytest

from radar.errors import SourceEmpty, SourceUnavailable
from radar.ingestion.loader import SeriesLoader
from radar.ingestion.sources import HttpCsvSource, LocalCsvSource, default_source
from radar.config import Settings

BASE_URL = "https://data.example.test/ticker_data"


def make_loader(handler, source=None) -> SeriesLoader:
    return SeriesLoader(
        source=source or HttpCsvSource(BASE_URL),
        request_timeout_seconds=1.0,
        min_field_count=30,
        min_payload_length=10,
        transport=httpx.MockTransport(handler),
    )


class TestSeriesLoader:
    """Distinct outcomes of one fetch-and-parse."""

    @pytest.mark.asyncio
    async def test_records_are_sorted_ascending(self, row_factory, csv_payload):
        text = csv_payload(
            [
                row_factory({0: "2024-01-01T03:00:00Z"}),
                row_factory({0: "2024-01-01T01:00:00Z"}),
                row_factory({0: "2024-01-01T02:00:00Z"}),
            ]
        )
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, text=text)

        records = await make_loader(handler).load("BONK")

        assert seen == [f"{BASE_URL}/BONK.csv"]
        timestamps = [r.timestamp for r in records]
        assert timestamps == sorted(timestamps)
        assert len(records) == 3

    @pytest.mark.asyncio
    async def test_short_payload_is_source_empty(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="a,b,c")

        with pytest.raises(SourceEmpty) as excinfo:
            await make_loader(handler).load("BONK")
        assert excinfo.value.kind == "source_empty"
        assert excinfo.value.symbol == "BONK"

    @pytest.mark.asyncio
    async def test_short_payload_is_not_parsed(self, monkeypatch):
        def explode(*args, **kwargs):
            raise AssertionError("parser must not run")

        monkeypatch.setattr("radar.ingestion.loader.parse_rows", explode)

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="12345")

        with pytest.raises(SourceEmpty):
            await make_loader(handler).load("BONK")

    @pytest.mark.asyncio
    async def test_non_success_status_is_source_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="not found")

        with pytest.raises(SourceUnavailable) as excinfo:
            await make_loader(handler).load("BONK")
        assert excinfo.value.kind == "source_unavailable"

    @pytest.mark.asyncio
    async def test_transport_failure_is_source_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(SourceUnavailable):
            await make_loader(handler).load("BONK")

    @pytest.mark.asyncio
    async def test_all_rows_rejected_is_empty_success(self, row_factory, csv_payload):
        text = csv_payload([row_factory(width=4), row_factory({0: "nope"})])

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text=text)

        assert await make_loader(handler).load("BONK") == []


class TestLocalCsvSource:
    """Offline ticker directories."""

    @pytest.mark.asyncio
    async def test_reads_symbol_file(self, tmp_path, row_factory, csv_payload):
        (tmp_path / "WIF.csv").write_text(csv_payload([row_factory()]), encoding="utf-8")
        loader = make_loader(lambda request: httpx.Response(500), source=LocalCsvSource(tmp_path))

        records = await loader.load("WIF")
        assert len(records) == 1

    @pytest.mark.asyncio
    async def test_undecodable_byte_only_drops_its_row(self, tmp_path, row_factory, csv_payload):
        good_rows = [row_factory({0: f"2024-01-01T{hour:02d}:00:00Z"}) for hour in range(20)]
        payload = csv_payload(good_rows).encode("utf-8")
        damaged = row_factory({0: "2024-01-02T00:00:00Z"}).replace("2024", "20\xff24", 1)
        (tmp_path / "WIF.csv").write_bytes(payload + damaged.encode("latin-1") + b"\n")
        loader = make_loader(lambda request: httpx.Response(500), source=LocalCsvSource(tmp_path))

        records = await loader.load("WIF")

        assert len(records) == 20
        assert records[-1].timestamp < 1_704_153_600_000

    @pytest.mark.asyncio
    async def test_missing_file_is_source_unavailable(self, tmp_path):
        loader = make_loader(lambda request: httpx.Response(500), source=LocalCsvSource(tmp_path))

        with pytest.raises(SourceUnavailable):
            await loader.load("WIF")


def test_default_source_prefers_url(tmp_path):
    with_url = Settings(ticker_data_url="https://example.test/data", ticker_data_dir_raw=str(tmp_path))
    assert isinstance(default_source(with_url), HttpCsvSource)

    without_url = Settings(ticker_data_url=None, ticker_data_dir_raw=str(tmp_path))
    source = default_source(without_url)
    assert isinstance(source, LocalCsvSource)
    assert source.directory == tmp_path
