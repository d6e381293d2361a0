# -*- coding: utf-8 -*-
"""Unit tests for RankingService."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from pump_radar.models.token_record import TokenMetadata
from pump_radar.models.trade import Trade
from pump_radar.persistence.repositories.in_memory.token_ledger_repository import (
    InMemoryTokenLedgerRepository,
)
from pump_radar.services.ranking.ranking_service import RankingService


async def _seed(
    ledger: InMemoryTokenLedgerRepository,
    token_id: str,
    trades: list[Trade],
    now: datetime,
    metadata: TokenMetadata | None = None,
) -> None:
    meta = metadata or TokenMetadata(symbol=token_id.upper(), name=token_id, dex="pump")
    for t in trades:
        await ledger.upsert_trade(token_id, meta, t, now=now)


async def test_rankings_on_empty_ledger_are_empty(
    ledger: InMemoryTokenLedgerRepository,
    settings: Any,
    now_utc: datetime,
) -> None:
    service = RankingService(ledger=ledger, settings=settings)

    assert await service.top_by_volume() == []
    assert await service.top_trending(now_utc) == []
    assert await service.top_surge(now_utc) == []


async def test_top_by_volume_sorts_descending_over_full_window(
    ledger: InMemoryTokenLedgerRepository,
    settings: Any,
    trade_at: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    await _seed(ledger, "a", [trade_at(age=500, volume=10), trade_at(age=1, volume=5)], now_utc)
    await _seed(ledger, "b", [trade_at(age=2, volume=40)], now_utc)
    await _seed(ledger, "c", [trade_at(age=3, volume=1)], now_utc)
    service = RankingService(ledger=ledger, settings=settings)

    ranking = await service.top_by_volume()

    assert [(e.token_id, e.volume) for e in ranking] == [("b", 40), ("a", 15), ("c", 1)]


async def test_top_by_volume_limits_to_ten_and_skips_empty_windows(
    ledger: InMemoryTokenLedgerRepository,
    settings: Any,
    metadata: TokenMetadata,
    trade_at: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    for i in range(12):
        await _seed(ledger, f"tok{i:02d}", [trade_at(age=1, volume=i + 1)], now_utc)
    past = now_utc - timedelta(minutes=20)
    await ledger.upsert_trade("stale", metadata, trade_at(age=1200), now=past)
    await ledger.prune_all(now_utc)
    service = RankingService(ledger=ledger, settings=settings)

    ranking = await service.top_by_volume()

    assert len(ranking) == 10
    assert ranking[0].token_id == "tok11"
    assert all(a.volume > b.volume for a, b in zip(ranking, ranking[1:]))
    assert "stale" not in {e.token_id for e in ranking}


async def test_top_by_volume_ties_keep_encounter_order(
    ledger: InMemoryTokenLedgerRepository,
    settings: Any,
    trade_at: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    await _seed(ledger, "first", [trade_at(volume=10)], now_utc)
    await _seed(ledger, "second", [trade_at(volume=10)], now_utc)

    ranking = await RankingService(ledger=ledger, settings=settings).top_by_volume()

    assert [e.token_id for e in ranking] == ["first", "second"]


async def test_top_trending_single_token_window_metrics(
    ledger: InMemoryTokenLedgerRepository,
    settings: Any,
    trade_at: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    await _seed(ledger, "a", [trade_at(age=90, volume=50), trade_at(age=30, volume=100)], now_utc)
    service = RankingService(ledger=ledger, settings=settings)

    (entry,) = await service.top_trending(now_utc)

    assert entry.vol1m == 100
    assert entry.vol5m == 150
    assert entry.trades1m == 1
    assert entry.price_change == 0.0
    assert entry.to_dict() == {
        "token": "a",
        "symbol": "A",
        "name": "a",
        "dex": "pump",
        "vol1m": 100,
        "vol5m": 150,
        "trades1m": 1,
        "priceChange": 0.0,
        "score": 355,
    }


async def test_top_trending_orders_by_score(
    ledger: InMemoryTokenLedgerRepository,
    settings: Any,
    trade_at: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    await _seed(ledger, "slow", [trade_at(age=200, volume=100)], now_utc)
    await _seed(ledger, "hot", [trade_at(age=10, volume=100)], now_utc)
    service = RankingService(ledger=ledger, settings=settings)

    ranking = await service.top_trending(now_utc)

    assert [e.token_id for e in ranking] == ["hot", "slow"]
    assert ranking[0].score == 100 * 2 + 5 + 100
    assert ranking[1].score == 100


async def test_top_trending_uses_configured_weights(
    ledger: InMemoryTokenLedgerRepository,
    settings_factory: Callable[..., Any],
    trade_at: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    settings = settings_factory(ranking={"weight_vol1m": 0, "weight_trades1m": 1, "weight_vol5m": 0})
    await _seed(ledger, "a", [trade_at(age=10, volume=1000), trade_at(age=5, volume=1)], now_utc)

    (entry,) = await RankingService(ledger=ledger, settings=settings).top_trending(now_utc)

    assert entry.score == 2


async def test_top_surge_ranks_ratio_and_no_history_fallback(
    ledger: InMemoryTokenLedgerRepository,
    settings: Any,
    trade_at: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    await _seed(ledger, "ratio", [trade_at(age=90, volume=10), trade_at(age=10, volume=50)], now_utc)
    await _seed(ledger, "fresh", [trade_at(age=10, volume=100)], now_utc)
    await _seed(ledger, "cooling", [trade_at(age=90, volume=100)], now_utc)
    service = RankingService(ledger=ledger, settings=settings)

    ranking = await service.top_surge(now_utc)

    assert [(e.token_id, e.surge) for e in ranking] == [("fresh", 100), ("ratio", 5.0), ("cooling", 0.0)]
    assert ranking[0].to_dict()["volPrev"] == 0
    assert set(ranking[0].to_dict()) == {"token", "symbol", "name", "dex", "volNow", "volPrev", "surge"}


async def test_rankings_are_idempotent_for_same_now(
    ledger: InMemoryTokenLedgerRepository,
    settings: Any,
    trade_at: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    await _seed(ledger, "a", [trade_at(age=70, volume=3, price=1), trade_at(age=5, volume=9, price=2)], now_utc)
    await _seed(ledger, "b", [trade_at(age=15, volume=4, price=1)], now_utc)
    service = RankingService(ledger=ledger, settings=settings)

    assert await service.top_trending(now_utc) == await service.top_trending(now_utc)
    assert await service.top_surge(now_utc) == await service.top_surge(now_utc)
    assert await service.top_by_volume() == await service.top_by_volume()


async def test_volume_entry_serializes_raw_trades(
    ledger: InMemoryTokenLedgerRepository,
    settings: Any,
    trade_at: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    trade = trade_at(age=0, volume=12, price=0.5)
    await _seed(ledger, "a", [trade], now_utc)

    (entry,) = await RankingService(ledger=ledger, settings=settings).top_by_volume()

    assert entry.to_dict() == {
        "token": "a",
        "symbol": "A",
        "name": "a",
        "dex": "pump",
        "trades": [{"time": int(now_utc.timestamp() * 1000), "volume": 12, "price": 0.5}],
        "volume": 12,
    }
