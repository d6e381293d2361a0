"""Exceptions subpackage."""

from pump_radar.exceptions.exceptions import (
    FeedError,
    FeedUnavailableError,
    MalformedFeedPayloadError,
    MalformedFeedRecordError,
    MissingRequiredConfigError,
    PumpRadarError,
)

__all__ = [
    "FeedError",
    "FeedUnavailableError",
    "MalformedFeedPayloadError",
    "MalformedFeedRecordError",
    "MissingRequiredConfigError",
    "PumpRadarError",
]
