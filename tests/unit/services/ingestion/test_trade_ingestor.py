# -*- coding: utf-8 -*-
"""Unit tests for TradeIngestor."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import pytest

from pump_radar.events.ingestion import (
    IngestionCycleCompletedEvent,
    IngestionCycleFailedEvent,
)
from pump_radar.exceptions import FeedUnavailableError, MalformedFeedPayloadError
from pump_radar.models.token_record import TokenMetadata
from pump_radar.models.trade import Trade
from pump_radar.persistence.repositories.in_memory.token_ledger_repository import (
    InMemoryTokenLedgerRepository,
)
from pump_radar.services.ingestion.trade_ingestor import TradeIngestor


def _raw(mint: str | None, *, protocol: str = "pump", amount: Any = 10.0, price: Any = 1.0) -> dict[str, Any]:
    return {
        "Trade": {
            "Dex": {"ProtocolName": protocol},
            "Buy": {
                "AmountInUSD": amount,
                "Price": price,
                "Currency": {"Symbol": "SYM", "Name": "Name", "MintAddress": mint},
            },
        }
    }


def _ingestor(
    settings: Any,
    ledger: InMemoryTokenLedgerRepository,
    feed: Any,
    event_bus: Any = None,
) -> TradeIngestor:
    return TradeIngestor(
        settings=settings,
        trade_feed=cast(Any, feed),
        ledger=ledger,
        event_bus=event_bus,
    )


async def test_run_cycle_writes_allowed_trades_with_shared_timestamp(
    settings: Any,
    ledger: InMemoryTokenLedgerRepository,
    event_bus: Any,
    now_utc: datetime,
) -> None:
    feed = SimpleNamespace(
        fetch_recent_trades=AsyncMock(
            return_value=[
                _raw("mint-a", amount=5),
                _raw("mint-b", protocol="raydium"),
                _raw("mint-a", protocol="PUMP_AMM", amount="7"),
                _raw(None),
            ]
        )
    )
    ingestor = _ingestor(settings, ledger, feed, event_bus)

    result = await ingestor.run_cycle(now=now_utc)

    feed.fetch_recent_trades.assert_awaited_once_with(100)
    assert result.success is True
    assert result.records_fetched == 4
    assert result.trades_ingested == 2
    assert result.records_skipped == 2
    assert result.tokens_touched == 1
    record = await ledger.get("mint-a")
    assert record is not None
    assert [t.volume_usd for t in record.trades] == [5.0, 7.0]
    assert {t.observed_at for t in record.trades} == {now_utc}
    assert record.dex == "pump"
    assert await ledger.get("mint-b") is None

    (event,) = event_bus.dispatched
    assert isinstance(event, IngestionCycleCompletedEvent)
    assert event.trades_ingested == 2
    assert event.tokens_touched == 1


async def test_run_cycle_with_only_disallowed_protocols_leaves_ledger_empty(
    settings: Any,
    ledger: InMemoryTokenLedgerRepository,
    now_utc: datetime,
) -> None:
    feed = SimpleNamespace(
        fetch_recent_trades=AsyncMock(return_value=[_raw("mint-x", protocol="orca")])
    )

    result = await _ingestor(settings, ledger, feed).run_cycle(now=now_utc)

    assert result.success is True
    assert result.trades_ingested == 0
    assert await ledger.count() == 0


async def test_run_cycle_disallowed_protocol_does_not_touch_known_token(
    settings: Any,
    ledger: InMemoryTokenLedgerRepository,
    metadata: TokenMetadata,
    trade_at: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    past = now_utc - timedelta(seconds=700)
    seeded = await ledger.upsert_trade("mint-a", metadata, trade_at(age=700, volume=3), now=past)
    feed = SimpleNamespace(
        fetch_recent_trades=AsyncMock(return_value=[_raw("mint-a", protocol="raydium", amount=99)])
    )

    result = await _ingestor(settings, ledger, feed).run_cycle(now=now_utc)

    assert result.records_skipped == 1
    record = await ledger.get("mint-a")
    assert record is seeded
    assert record.trades == seeded.trades


@pytest.mark.parametrize(
    ("error", "reason", "status_code"),
    [
        (FeedUnavailableError("down", url="u", status_code=503), "feed_unavailable", 503),
        (MalformedFeedPayloadError("bad"), "malformed_payload", None),
    ],
)
async def test_run_cycle_failure_leaves_ledger_unchanged(
    error: Exception,
    reason: str,
    status_code: int | None,
    settings: Any,
    ledger: InMemoryTokenLedgerRepository,
    metadata: TokenMetadata,
    trade_at: Callable[..., Trade],
    event_bus: Any,
    now_utc: datetime,
) -> None:
    existing = await ledger.upsert_trade("mint-a", metadata, trade_at(age=700), now=now_utc - timedelta(seconds=700))
    before = await ledger.snapshot()
    feed = SimpleNamespace(fetch_recent_trades=AsyncMock(side_effect=error))

    result = await _ingestor(settings, ledger, feed, event_bus).run_cycle(now=now_utc)

    assert result.success is False
    assert result.error == str(error)
    assert await ledger.snapshot() == before
    assert (await ledger.get("mint-a")) == existing
    (event,) = event_bus.dispatched
    assert isinstance(event, IngestionCycleFailedEvent)
    assert event.reason == reason
    assert event.status_code == status_code


async def test_run_cycle_uses_configured_limit_and_protocols(
    settings_factory: Callable[..., Any],
    ledger: InMemoryTokenLedgerRepository,
    now_utc: datetime,
) -> None:
    settings = settings_factory(ingestion={"trades_limit": 25, "protocols": "raydium"})
    feed = SimpleNamespace(
        fetch_recent_trades=AsyncMock(
            return_value=[_raw("mint-r", protocol="Raydium"), _raw("mint-p", protocol="pump")]
        )
    )

    result = await _ingestor(settings, ledger, feed).run_cycle(now=now_utc)

    feed.fetch_recent_trades.assert_awaited_once_with(25)
    assert result.trades_ingested == 1
    assert await ledger.get("mint-r") is not None
    assert await ledger.get("mint-p") is None


async def test_run_cycle_without_event_bus_does_not_dispatch(
    settings: Any,
    ledger: InMemoryTokenLedgerRepository,
    now_utc: datetime,
) -> None:
    feed = SimpleNamespace(fetch_recent_trades=AsyncMock(return_value=[_raw("mint-a")]))

    result = await _ingestor(settings, ledger, feed, event_bus=None).run_cycle(now=now_utc)

    assert result.success is True


async def test_poll_keeps_running_after_failed_cycles(
    settings: Any,
    ledger: InMemoryTokenLedgerRepository,
    event_bus: Any,
) -> None:
    calls = 0
    third_call = asyncio.Event()

    async def _fetch(limit: int) -> list[dict[str, Any]]:
        nonlocal calls
        calls += 1
        if calls >= 3:
            third_call.set()
            return [_raw("mint-a")]
        if calls == 1:
            raise FeedUnavailableError("down")
        raise RuntimeError("unexpected")

    feed = SimpleNamespace(fetch_recent_trades=_fetch)
    ingestor = _ingestor(settings, ledger, feed, event_bus)

    task = asyncio.create_task(ingestor.poll(poll_seconds=0.01))
    await asyncio.wait_for(third_call.wait(), timeout=2.0)
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    reasons = [getattr(e, "reason", None) for e in event_bus.dispatched[:2]]
    assert reasons == ["feed_unavailable", "unexpected_error"]
    assert await ledger.get("mint-a") is not None
