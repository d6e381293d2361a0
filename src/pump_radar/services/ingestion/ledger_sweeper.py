"""Periodic full prune of the token ledger.

Writes only prune the tokens they touch, so a token that stops trading keeps
its last trades until it trades again. The sweeper bounds that staleness by
pruning every record on a fixed interval. Enabled with INGESTION__SWEEP_ENABLED.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from pump_radar.config import Settings
    from pump_radar.persistence.repositories.interfaces.token_ledger_repository import (
        ITokenLedgerRepository,
    )


class LedgerSweeper:
    """Prunes all ledger records relative to the current time."""

    def __init__(
        self,
        settings: Settings,
        ledger: ITokenLedgerRepository,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._settings = settings
        self._ledger = ledger
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def sweep_once(self, now: datetime | None = None) -> int:
        """Prune every record; return the number of trades dropped."""
        dropped = await self._ledger.prune_all(now or datetime.now(UTC))
        if dropped:
            self._logger.debug("ledger_swept", ledger_trades_dropped=dropped)
        return dropped

    async def run(self, interval_seconds: float | None = None) -> None:
        """Sweep every interval_seconds until cancelled."""
        interval = (
            interval_seconds
            if interval_seconds is not None
            else self._settings.ingestion.sweep_interval_seconds
        )
        self._logger.info("ledger_sweeper_started", sweep_interval_seconds=interval)
        try:
            while True:
                await asyncio.sleep(interval)
                try:
                    await self.sweep_once()
                except Exception as e:
                    self._logger.exception(
                        "ledger_sweep_exception",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
        except asyncio.CancelledError:
            self._logger.info("ledger_sweeper_stopped")
            raise
