# -*- coding: utf-8 -*-
"""FeedHealthMonitor: listens to ingestion cycle events and keeps feed status for /health."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Literal, Optional

import structlog

from pump_radar.events.ingestion import (
    IngestionCycleCompletedEvent,
    IngestionCycleFailedEvent,
)

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

FeedStatus = Literal["starting", "ok", "degraded"]


@dataclass(frozen=True)
class FeedHealth:
    """Point-in-time feed status."""

    status: FeedStatus
    cycles_ok: int
    cycles_failed: int
    consecutive_failures: int
    last_success_at: Optional[datetime]
    last_failure_at: Optional[datetime]
    last_error: Optional[str]
    last_trades_ingested: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "cycles_ok": self.cycles_ok,
            "cycles_failed": self.cycles_failed,
            "consecutive_failures": self.consecutive_failures,
            "last_success_at": self.last_success_at.isoformat() if self.last_success_at else None,
            "last_failure_at": self.last_failure_at.isoformat() if self.last_failure_at else None,
            "last_error": self.last_error,
            "last_trades_ingested": self.last_trades_ingested,
        }


class FeedHealthMonitor:
    """Subscribes to ingestion events and aggregates them into FeedHealth."""

    def __init__(
        self,
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._event_bus: "EventBus" = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._cycles_ok = 0
        self._cycles_failed = 0
        self._consecutive_failures = 0
        self._last_success_at: Optional[datetime] = None
        self._last_failure_at: Optional[datetime] = None
        self._last_error: Optional[str] = None
        self._last_trades_ingested = 0

    def start(self) -> None:
        """Subscribe to ingestion cycle events."""
        self._event_bus.on(IngestionCycleCompletedEvent, self._on_completed)
        self._event_bus.on(IngestionCycleFailedEvent, self._on_failed)
        self._logger.debug("feed_health_monitor_started")

    def stop(self) -> None:
        """Unsubscribe from ingestion cycle events."""
        handlers = getattr(self._event_bus, "handlers", {})
        for event_type, handler in (
            (IngestionCycleCompletedEvent, self._on_completed),
            (IngestionCycleFailedEvent, self._on_failed),
        ):
            key = event_type.__name__
            if key in handlers:
                handlers[key] = [h for h in handlers[key] if h != handler]
        self._logger.debug("feed_health_monitor_stopped")

    def _on_completed(self, event: IngestionCycleCompletedEvent) -> None:
        if self._consecutive_failures:
            self._logger.info(
                "feed_recovered",
                feed_failures_before_recovery=self._consecutive_failures,
            )
        self._cycles_ok += 1
        self._consecutive_failures = 0
        self._last_success_at = event.observed_at
        self._last_trades_ingested = event.trades_ingested

    def _on_failed(self, event: IngestionCycleFailedEvent) -> None:
        self._cycles_failed += 1
        self._consecutive_failures += 1
        self._last_failure_at = event.observed_at
        self._last_error = event.error_message or event.reason

    def health(self) -> FeedHealth:
        """Return the current feed status."""
        if self._cycles_ok == 0 and self._cycles_failed == 0:
            status: FeedStatus = "starting"
        elif self._consecutive_failures:
            status = "degraded"
        else:
            status = "ok"
        return FeedHealth(
            status=status,
            cycles_ok=self._cycles_ok,
            cycles_failed=self._cycles_failed,
            consecutive_failures=self._consecutive_failures,
            last_success_at=self._last_success_at,
            last_failure_at=self._last_failure_at,
            last_error=self._last_error,
            last_trades_ingested=self._last_trades_ingested,
        )
