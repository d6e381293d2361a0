# -*- coding: utf-8 -*-
"""Ingestion cycle events (emitted by TradeIngestor, handled by FeedHealthMonitor)."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from bubus import BaseEvent  # type: ignore[import-untyped]


class IngestionCycleCompletedEvent(BaseEvent[None]):
    """Emitted after a poll whose batch was written to the ledger."""

    observed_at: datetime
    """Ingestion timestamp shared by every trade of the batch."""

    records_fetched: int
    trades_ingested: int
    records_skipped: int
    """Records outside the protocol allow-list or without a token id."""

    tokens_touched: int
    latency_ms: float


class IngestionCycleFailedEvent(BaseEvent[None]):
    """Emitted when a poll was skipped because the feed failed. The ledger is unchanged."""

    observed_at: datetime
    reason: Literal["feed_unavailable", "malformed_payload", "unexpected_error"]
    error_message: str | None = None
    status_code: int | None = None
