# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, FEED__API_KEY.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import AliasChoices, Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "pump-radar"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Local outputs
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/pump_radar.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 14
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    # Logfire integration via structlog
    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class FeedSettings(BaseSettings):
    """Bitquery trade feed (GraphQL over HTTP, bearer auth)."""

    model_config = SettingsConfigDict(extra="ignore")

    url: str = Field(
        default="https://streaming.bitquery.io/eap",
        description="GraphQL endpoint of the trade feed.",
    )
    api_key: Optional[str] = Field(
        default=None,
        description="Bearer token for the feed (env: FEED__API_KEY or BITQUERY_API_KEY).",
        validation_alias=AliasChoices("api_key", "bitquery_api_key"),
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_attempts: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Attempts per tick. A failed tick is skipped, the next tick tries again.",
    )


class IngestionSettings(BaseSettings):
    """Polling, protocol filter and retention of the token ledger."""

    model_config = SettingsConfigDict(extra="ignore")

    poll_seconds: float = Field(
        default=4.0,
        ge=0.5,
        le=300.0,
        description="Interval between feed polls in seconds.",
    )
    trades_limit: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Number of most recent trades requested per poll.",
    )
    # Raw string from env so pydantic-settings does not try to JSON-decode it.
    protocols_raw: str = Field(
        default="pump,pump_amm,pumpswap",
        description="Accepted DEX protocol names, comma-separated. Env: INGESTION__PROTOCOLS.",
        validation_alias="protocols",
    )
    retention_seconds: float = Field(
        default=600.0,
        gt=0.0,
        description="Trades older than this (relative to the last prune) are dropped.",
    )
    sweep_enabled: bool = Field(
        default=False,
        description="Periodically prune every token, not only the ones touched by a poll.",
    )
    sweep_interval_seconds: float = Field(default=30.0, ge=1.0, le=3600.0)

    @computed_field
    @property
    def protocols(self) -> list[str]:
        """Parse comma-separated protocols_raw into lower-cased protocol names."""
        if not self.protocols_raw or not self.protocols_raw.strip():
            return []
        return [s.strip().lower() for s in self.protocols_raw.split(",") if s.strip()]


class RankingSettings(BaseSettings):
    """Windows and weights of the ranking projections."""

    model_config = SettingsConfigDict(extra="ignore")

    limit: int = Field(default=10, ge=1, le=100, description="Entries returned per ranking.")
    short_window_seconds: float = Field(default=60.0, gt=0.0)
    medium_window_seconds: float = Field(default=300.0, gt=0.0)

    # Trending score = vol1m*w1 + trades1m*w2 + vol5m*w3 + priceChange*w4
    weight_vol1m: float = 2.0
    weight_trades1m: float = 5.0
    weight_vol5m: float = 1.0
    weight_price_change: float = 10.0


class ServerSettings(BaseSettings):
    """HTTP query surface."""

    model_config = SettingsConfigDict(extra="ignore")

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535, description="Listen port (env: SERVER__PORT or PORT).")
    cors_allow_origin: str = "*"


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, INGESTION__POLL_SECONDS.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    feed: FeedSettings = Field(default_factory=FeedSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    ranking: RankingSettings = Field(default_factory=RankingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    # Flat keys (env or .env) folded into their sections; FEED__API_KEY / SERVER__PORT win.
    bitquery_api_key: Optional[str] = Field(default=None, exclude=True, repr=False)
    port: Optional[int] = Field(default=None, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _fold_flat_keys(cls, data: Any) -> Any:
        """Copy BITQUERY_API_KEY into feed.api_key and PORT into server.port when unset."""
        if not isinstance(data, dict):
            return data
        values = dict(data)
        for flat_key, section, key in (
            ("bitquery_api_key", "feed", "api_key"),
            ("port", "server", "port"),
        ):
            flat = values.get(flat_key)
            if flat is None or flat == "":
                continue
            current = values.get(section)
            if current is None:
                current = {}
            if not isinstance(current, dict) or current.get(key) not in (None, ""):
                continue
            values[section] = {**current, key: flat}
        return values

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as flat keys or nested dicts, e.g.:
        - from_env(ingestion={"poll_seconds": 2})
        - from_env(ranking={"limit": 20})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from pump_radar.config import get_settings

        settings = get_settings()
        poll_seconds = settings.ingestion.poll_seconds
    """
    return Settings()
