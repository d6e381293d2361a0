# -*- coding: utf-8 -*-
"""Scoring: pure computation of volume, trending and surge metrics from trades.

No I/O, no side effects. Ages are measured against a caller-supplied `now`;
a trade is inside a window of length w when its age is < w.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pump_radar.config import RankingSettings
    from pump_radar.models.trade import Trade


@dataclass(frozen=True, slots=True)
class TrendingWeights:
    """Weights of the trending score terms."""

    vol1m: float = 2.0
    trades1m: float = 5.0
    vol5m: float = 1.0
    price_change: float = 10.0

    @classmethod
    def from_settings(cls, settings: RankingSettings) -> TrendingWeights:
        return cls(
            vol1m=settings.weight_vol1m,
            trades1m=settings.weight_trades1m,
            vol5m=settings.weight_vol5m,
            price_change=settings.weight_price_change,
        )


@dataclass(frozen=True, slots=True)
class TrendingMetrics:
    vol1m: float
    vol5m: float
    trades1m: int
    price_change: float
    """Percent change first -> last price inside the medium window."""
    score: float


@dataclass(frozen=True, slots=True)
class SurgeMetrics:
    vol_now: float
    vol_prev: float
    surge: float


def total_volume(trades: Iterable[Trade]) -> float:
    """Sum of volume_usd."""
    return sum((t.volume_usd for t in trades), 0.0)


def trades_in_window(
    trades: Iterable[Trade],
    now: datetime,
    max_age_seconds: float,
    min_age_seconds: float | None = None,
) -> list[Trade]:
    """Trades with min_age <= age < max_age, order preserved.

    Without min_age only the upper bound applies, so trades stamped after
    now still count as current.
    """
    selected: list[Trade] = []
    for t in trades:
        age = t.age_seconds(now)
        if age >= max_age_seconds:
            continue
        if min_age_seconds is not None and age < min_age_seconds:
            continue
        selected.append(t)
    return selected


def price_change_pct(trades: Sequence[Trade]) -> float:
    """Percent change from the first to the last trade price.

    0 with fewer than two trades or when the first price is 0.
    """
    if len(trades) < 2:
        return 0.0
    first = trades[0].price
    last = trades[-1].price
    if first <= 0:
        return 0.0
    return (last - first) / first * 100.0


def trending_metrics(
    trades: Sequence[Trade],
    now: datetime,
    *,
    short_window_seconds: float = 60.0,
    medium_window_seconds: float = 300.0,
    weights: TrendingWeights = TrendingWeights(),
) -> TrendingMetrics:
    """score = vol1m*w + trades1m*w + vol5m*w + price_change*w over the two windows."""
    short = trades_in_window(trades, now, short_window_seconds)
    medium = trades_in_window(trades, now, medium_window_seconds)
    vol1m = total_volume(short)
    vol5m = total_volume(medium)
    trades1m = len(short)
    change = price_change_pct(medium)
    score = (
        vol1m * weights.vol1m
        + trades1m * weights.trades1m
        + vol5m * weights.vol5m
        + change * weights.price_change
    )
    return TrendingMetrics(
        vol1m=vol1m,
        vol5m=vol5m,
        trades1m=trades1m,
        price_change=change,
        score=score,
    )


def surge_metrics(
    trades: Sequence[Trade],
    now: datetime,
    *,
    window_seconds: float = 60.0,
) -> SurgeMetrics:
    """Volume of the last window against the window before it.

    surge = vol_now / vol_prev, or vol_now itself when vol_prev is 0, so a
    token with no previous activity ranks by raw current volume.
    """
    vol_now = total_volume(trades_in_window(trades, now, window_seconds))
    vol_prev = total_volume(
        trades_in_window(trades, now, 2 * window_seconds, min_age_seconds=window_seconds)
    )
    surge = vol_now / vol_prev if vol_prev > 0 else vol_now
    return SurgeMetrics(vol_now=vol_now, vol_prev=vol_prev, surge=surge)
