"""Trade ingestion service (polling the feed into the token ledger)."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog

from pump_radar.events.ingestion import (
    IngestionCycleCompletedEvent,
    IngestionCycleFailedEvent,
)
from pump_radar.exceptions import (
    FeedError,
    FeedUnavailableError,
    MalformedFeedRecordError,
)
from pump_radar.services.ingestion.trade_normalizer import (
    NormalizedTrade,
    normalize_trade_record,
)

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from pump_radar.clients.trade_feed import TradeFeedClient
    from pump_radar.config import Settings
    from pump_radar.persistence.repositories.interfaces.token_ledger_repository import (
        ITokenLedgerRepository,
    )


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of one ingestion cycle."""

    success: bool
    observed_at: datetime
    records_fetched: int = 0
    trades_ingested: int = 0
    records_skipped: int = 0
    tokens_touched: int = 0
    latency_ms: float = 0.0
    error: str | None = None


class TradeIngestor:
    """Polls the trade feed and writes allow-listed trades into the token ledger.

    A cycle is all-or-nothing: if the fetch fails nothing is written. Every
    trade of a batch shares one ingestion timestamp.
    """

    def __init__(
        self,
        settings: Settings,
        trade_feed: TradeFeedClient,
        ledger: ITokenLedgerRepository,
        event_bus: Any = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the ingestor.

        Args:
            settings: Application settings (uses settings.ingestion).
            trade_feed: Feed client (injected).
            ledger: Token ledger to write into (injected).
            event_bus: Optional bubus EventBus; cycle events are dispatched when set.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._feed = trade_feed
        self._ledger = ledger
        self._event_bus: EventBus | None = event_bus
        self._protocols = frozenset(settings.ingestion.protocols)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _dispatch(self, event: Any) -> None:
        if self._event_bus is None:
            return
        self._event_bus.dispatch(event)

    def _normalize_batch(
        self,
        records: list[Any],
        observed_at: datetime,
    ) -> tuple[list[NormalizedTrade], int]:
        """Return accepted trades (feed order) and the number of skipped records."""
        accepted: list[NormalizedTrade] = []
        skipped = 0
        for record in records:
            try:
                normalized = normalize_trade_record(record, self._protocols, observed_at)
            except MalformedFeedRecordError as e:
                skipped += 1
                self._logger.debug(
                    "ingestion_record_malformed",
                    record_field=e.field,
                    error_message=str(e),
                )
                continue
            if normalized is None:
                skipped += 1
                continue
            accepted.append(normalized)
        return accepted, skipped

    def _failed(
        self,
        observed_at: datetime,
        reason: str,
        error: Exception,
        started: float,
    ) -> IngestionResult:
        status_code = error.status_code if isinstance(error, FeedUnavailableError) else None
        latency_ms = (time.perf_counter() - started) * 1000.0
        self._dispatch(
            IngestionCycleFailedEvent(
                observed_at=observed_at,
                reason=reason,
                error_message=str(error),
                status_code=status_code,
            )
        )
        return IngestionResult(
            success=False,
            observed_at=observed_at,
            latency_ms=latency_ms,
            error=str(error),
        )

    async def run_cycle(self, now: datetime | None = None) -> IngestionResult:
        """Run one poll: fetch, filter, normalize and write the batch.

        Args:
            now: Ingestion timestamp for the batch; defaults to the UTC time
                at which the response arrived.

        Returns:
            IngestionResult; success is False when the feed failed (ledger untouched).
        """
        limit = self._settings.ingestion.trades_limit
        started = time.perf_counter()
        try:
            records = await self._feed.fetch_recent_trades(limit)
        except FeedError as e:
            observed_at = now or datetime.now(UTC)
            reason = (
                "feed_unavailable"
                if isinstance(e, FeedUnavailableError)
                else "malformed_payload"
            )
            self._logger.warning(
                "ingestion_cycle_failed",
                ingestion_failure_reason=reason,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return self._failed(observed_at, reason, e, started)

        observed_at = now or datetime.now(UTC)
        latency_ms = (time.perf_counter() - started) * 1000.0
        accepted, skipped = self._normalize_batch(list(records), observed_at)
        touched = await self._ledger.upsert_trades(
            (n.as_entry() for n in accepted),
            now=observed_at,
        )

        result = IngestionResult(
            success=True,
            observed_at=observed_at,
            records_fetched=len(records),
            trades_ingested=len(accepted),
            records_skipped=skipped,
            tokens_touched=len(touched),
            latency_ms=latency_ms,
        )
        self._logger.info(
            "ingestion_cycle_completed",
            ingestion_records_fetched=result.records_fetched,
            ingestion_trades_ingested=result.trades_ingested,
            ingestion_records_skipped=result.records_skipped,
            ingestion_tokens_touched=result.tokens_touched,
            feed_latency_ms=round(latency_ms, 1),
        )
        self._dispatch(
            IngestionCycleCompletedEvent(
                observed_at=observed_at,
                records_fetched=result.records_fetched,
                trades_ingested=result.trades_ingested,
                records_skipped=result.records_skipped,
                tokens_touched=result.tokens_touched,
                latency_ms=latency_ms,
            )
        )
        return result

    async def poll(self, poll_seconds: float | None = None) -> None:
        """Run a cycle now and then every poll_seconds until cancelled.

        Unexpected errors inside a cycle are logged and the loop continues.

        Args:
            poll_seconds: Polling interval; default from settings.ingestion.poll_seconds.
        """
        poll_seconds = (
            poll_seconds if poll_seconds is not None else self._settings.ingestion.poll_seconds
        )
        if poll_seconds <= 0:
            poll_seconds = 1.0

        self._logger.info(
            "ingestion_started",
            ingestion_poll_seconds=poll_seconds,
            ingestion_trades_limit=self._settings.ingestion.trades_limit,
            ingestion_protocols=sorted(self._protocols),
        )
        try:
            while True:
                started = time.perf_counter()
                try:
                    await self.run_cycle()
                except Exception as e:
                    self._logger.exception(
                        "ingestion_cycle_exception",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    self._failed(datetime.now(UTC), "unexpected_error", e, started)
                elapsed = time.perf_counter() - started
                await asyncio.sleep(max(0.0, poll_seconds - elapsed))
        except asyncio.CancelledError:
            self._logger.info("ingestion_stopped", ingestion_stop_reason="cancelled")
            raise
