from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from dotenv import load_dotenv

load_dotenv()


@dataclass(slots=True)
class Settings:
    """Central configuration driven by environment variables."""

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    request_timeout_seconds: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

    data_dir: Path = field(default_factory=lambda: Path(os.getenv("DATA_DIR", "./data")))
    ticker_data_dir_raw: str | None = os.getenv("TICKER_DATA_DIR")
    ticker_data_url: str | None = os.getenv("TICKER_DATA_URL")

    # Rows with fewer comma-separated fields are rejected by the row parser.
    min_field_count: int = int(os.getenv("MIN_FIELD_COUNT", "30"))
    # Payloads shorter than this (after stripping) count as an empty source.
    min_payload_length: int = int(os.getenv("MIN_PAYLOAD_LENGTH", "10"))

    default_symbol: str = os.getenv("DEFAULT_SYMBOL", "ACT")
    default_time_frame: str = os.getenv("DEFAULT_TIME_FRAME", "ALL")
    synthetic_days: int = int(os.getenv("SYNTHETIC_DAYS", "180"))

    dashboard_api_base_url: str | None = os.getenv("API_BASE_URL")

    def ensure_paths(self) -> None:
        """Create expected directories if they do not exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        (self.data_dir / "export").mkdir(parents=True, exist_ok=True)

    @property
    def ticker_data_dir(self) -> Path:
        if self.ticker_data_dir_raw:
            return Path(self.ticker_data_dir_raw)
        return self.data_dir / "ticker_data"

    @property
    def export_dir(self) -> Path:
        return self.data_dir / "export"

    @property
    def resolved_api_base_url(self) -> str:
        if self.dashboard_api_base_url:
            return self.dashboard_api_base_url.rstrip("/")
        return f"http://{self.api_host}:{self.api_port}"


# Singleton-style settings import
settings: Final[Settings] = Settings()
settings.ensure_paths()
