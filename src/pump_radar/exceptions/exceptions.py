"""Custom exceptions for the trade feed and ingestion."""

from __future__ import annotations


class PumpRadarError(Exception):
    """Base exception for pump-radar errors."""

    pass


class MissingRequiredConfigError(PumpRadarError):
    """Raised when a required configuration value is missing."""

    pass


class FeedError(PumpRadarError):
    """Base exception for trade feed failures. An ingestion cycle that hits one is skipped."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.cause = cause


class FeedUnavailableError(FeedError):
    """Raised on network errors, timeouts or non-2xx responses from the feed."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, url=url, cause=cause)
        self.status_code = status_code


class MalformedFeedPayloadError(FeedError):
    """Raised when the feed answers 2xx but the body is not the expected shape."""


class MalformedFeedRecordError(PumpRadarError):
    """Raised for a single feed record that cannot be attributed to a token."""

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message)
        self.field = field
