"""Ranking entries returned by RankingService and serialized by the API.

to_dict() produces the public JSON shape (camelCase metric names).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pump_radar.models.token_record import TokenRecord
from pump_radar.models.trade import Trade


def _identity(record: TokenRecord) -> dict[str, Any]:
    return {
        "token": record.token_id,
        "symbol": record.symbol,
        "name": record.name,
        "dex": record.dex,
    }


@dataclass(frozen=True, slots=True)
class VolumeRanking:
    record: TokenRecord
    volume: float

    @property
    def token_id(self) -> str:
        return self.record.token_id

    @property
    def trades(self) -> tuple[Trade, ...]:
        return self.record.trades

    def to_dict(self) -> dict[str, Any]:
        return {
            **_identity(self.record),
            "trades": [t.to_dict() for t in self.record.trades],
            "volume": self.volume,
        }


@dataclass(frozen=True, slots=True)
class TrendingRanking:
    record: TokenRecord
    vol1m: float
    vol5m: float
    trades1m: int
    price_change: float
    score: float

    @property
    def token_id(self) -> str:
        return self.record.token_id

    def to_dict(self) -> dict[str, Any]:
        return {
            **_identity(self.record),
            "vol1m": self.vol1m,
            "vol5m": self.vol5m,
            "trades1m": self.trades1m,
            "priceChange": self.price_change,
            "score": self.score,
        }


@dataclass(frozen=True, slots=True)
class SurgeRanking:
    record: TokenRecord
    vol_now: float
    vol_prev: float
    surge: float

    @property
    def token_id(self) -> str:
        return self.record.token_id

    def to_dict(self) -> dict[str, Any]:
        return {
            **_identity(self.record),
            "volNow": self.vol_now,
            "volPrev": self.vol_prev,
            "surge": self.surge,
        }
