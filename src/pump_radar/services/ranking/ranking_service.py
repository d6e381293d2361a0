# -*- coding: utf-8 -*-
"""RankingService: on-demand projections of the token ledger.

Each call takes one ledger snapshot and computes its ranking synchronously
from it, so a ranking never mixes records from before and after a write.
Sorting is stable: ties keep first-observation order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TypeVar

from pump_radar.services.ranking.dto import SurgeRanking, TrendingRanking, VolumeRanking
from pump_radar.services.ranking.scoring import (
    TrendingWeights,
    surge_metrics,
    total_volume,
    trending_metrics,
)

if TYPE_CHECKING:
    from pump_radar.config import Settings
    from pump_radar.persistence.repositories.interfaces.token_ledger_repository import (
        ITokenLedgerRepository,
    )

T = TypeVar("T")


def _top(items: Iterable[T], key: Callable[[T], float], limit: int) -> list[T]:
    """Descending by key, stable, at most limit items."""
    return sorted(items, key=key, reverse=True)[: max(0, limit)]


class RankingService:
    """Top-by-volume, trending and surge rankings over the token ledger."""

    def __init__(
        self,
        ledger: ITokenLedgerRepository,
        settings: Settings,
    ) -> None:
        """Initialize the service.

        Args:
            ledger: Token ledger to read from (injected).
            settings: Application settings (uses settings.ranking).
        """
        self._ledger = ledger
        self._ranking = settings.ranking
        self._weights = TrendingWeights.from_settings(settings.ranking)

    def _limit(self, limit: int | None) -> int:
        return self._ranking.limit if limit is None else limit

    async def top_by_volume(self, *, limit: int | None = None) -> list[VolumeRanking]:
        """Tokens by total retained volume, descending.

        Tokens whose window is empty are left out.
        """
        records = await self._ledger.snapshot()
        entries = [
            VolumeRanking(record=r, volume=total_volume(r.trades))
            for r in records
            if r.trades
        ]
        return _top(entries, lambda e: e.volume, self._limit(limit))

    async def top_trending(
        self,
        now: datetime | None = None,
        *,
        limit: int | None = None,
    ) -> list[TrendingRanking]:
        """Tokens by trending score relative to now (default: current UTC time)."""
        now = now or datetime.now(UTC)
        records = await self._ledger.snapshot()
        entries: list[TrendingRanking] = []
        for r in records:
            m = trending_metrics(
                r.trades,
                now,
                short_window_seconds=self._ranking.short_window_seconds,
                medium_window_seconds=self._ranking.medium_window_seconds,
                weights=self._weights,
            )
            entries.append(
                TrendingRanking(
                    record=r,
                    vol1m=m.vol1m,
                    vol5m=m.vol5m,
                    trades1m=m.trades1m,
                    price_change=m.price_change,
                    score=m.score,
                )
            )
        return _top(entries, lambda e: e.score, self._limit(limit))

    async def top_surge(
        self,
        now: datetime | None = None,
        *,
        limit: int | None = None,
    ) -> list[SurgeRanking]:
        """Tokens by last-minute volume over previous-minute volume, descending."""
        now = now or datetime.now(UTC)
        records = await self._ledger.snapshot()
        entries: list[SurgeRanking] = []
        for r in records:
            m = surge_metrics(r.trades, now, window_seconds=self._ranking.short_window_seconds)
            entries.append(
                SurgeRanking(record=r, vol_now=m.vol_now, vol_prev=m.vol_prev, surge=m.surge)
            )
        return _top(entries, lambda e: e.surge, self._limit(limit))
