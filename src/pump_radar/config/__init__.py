"""Configuration subpackage."""

from pump_radar.config.config import (
    AppSettings,
    FeedSettings,
    IngestionSettings,
    LoggingSettings,
    RankingSettings,
    ServerSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "FeedSettings",
    "IngestionSettings",
    "LoggingSettings",
    "RankingSettings",
    "ServerSettings",
    "Settings",
    "get_settings",
]
