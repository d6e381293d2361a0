# -*- coding: utf-8 -*-
"""Async HTTP client with bounded attempts and structured failure logging."""

from __future__ import annotations

import asyncio
import random
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from pump_radar.config import Settings
from pump_radar.exceptions import FeedUnavailableError, MalformedFeedPayloadError


class AsyncHttpClient:
    """Async HTTP client for the trade feed.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created and must be closed via aclose() or used
    as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (uses settings.feed timeout and max_attempts).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.feed.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    async def post(
        self,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Perform a POST request with JSON body and return parsed JSON.

        Makes up to settings.feed.max_attempts attempts; sleeps with backoff
        only between attempts.

        Args:
            url: Full URL to request.
            json: Optional JSON-serializable body.
            headers: Optional extra request headers (e.g. Authorization).

        Returns:
            Parsed JSON response (dict or list).

        Raises:
            FeedUnavailableError: Network error, timeout or non-2xx on every attempt.
            MalformedFeedPayloadError: 2xx response whose body is not valid JSON.
        """
        payload = json or {}
        request_id = uuid.uuid4().hex[:12]
        max_attempts = self._settings.feed.max_attempts
        last_error: Optional[Exception] = None

        with bound_contextvars(
            http_url=url,
            http_request_id=request_id,
            http_max_attempts=max_attempts,
        ):
            for attempt in range(max_attempts):
                with bound_contextvars(http_attempt=attempt + 1):
                    try:
                        session = await self._get_session()
                        async with session.post(url, json=payload, headers=headers) as response:
                            response.raise_for_status()
                            try:
                                return await response.json(content_type=None)
                            except ValueError as e:
                                self._logger.warning(
                                    "http_post_invalid_json",
                                    http_status_code=response.status,
                                    error_message=str(e),
                                )
                                raise MalformedFeedPayloadError(
                                    f"Response is not valid JSON: {url}",
                                    url=url,
                                    cause=e,
                                ) from e
                    except aiohttp.ClientResponseError as e:
                        last_error = e
                        self._logger.debug(
                            "http_post_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                            http_status_code=getattr(e, "status", None),
                        )
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        last_error = e
                        self._logger.debug(
                            "http_post_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                    if attempt + 1 < max_attempts:
                        await asyncio.sleep(self._backoff_delay(attempt))

            status_code = (
                getattr(last_error, "status", None)
                if isinstance(last_error, aiohttp.ClientResponseError)
                else None
            )
            self._logger.warning(
                "http_post_failed",
                http_status_code=status_code,
                http_attempts=max_attempts,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise FeedUnavailableError(
                f"POST failed after {max_attempts} attempt(s): {url}",
                url=url,
                status_code=status_code,
                cause=last_error,
            ) from last_error
