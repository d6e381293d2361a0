"""Trade: one observed buy-side fill attributed to a token."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class Trade:
    """Immutable trade event.

    observed_at is the ingestion-cycle timestamp, shared by every trade of one
    poll, not the block time reported by the feed.
    """

    observed_at: datetime
    volume_usd: float = 0.0
    price: float = 0.0

    def age_seconds(self, now: datetime) -> float:
        """Seconds elapsed between observation and now (negative if observed after now)."""
        return (now - self.observed_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Public shape: epoch milliseconds, volume, price."""
        return {
            "time": int(self.observed_at.timestamp() * 1000),
            "volume": self.volume_usd,
            "price": self.price,
        }
