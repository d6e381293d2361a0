"""TokenRecord: retained trade history of one token, keyed by mint address.

Records are immutable. Appending or pruning returns a new record, which the
ledger stores in place of the old one, so readers holding a record never see
it half-updated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from pump_radar.models.trade import Trade


@dataclass(frozen=True, slots=True)
class TokenMetadata:
    """Descriptive fields captured at first observation (first write wins)."""

    symbol: str = ""
    name: str = ""
    dex: str = ""
    """Lower-cased protocol name the token was first seen on."""


@dataclass(frozen=True, slots=True)
class TokenRecord:
    """One token and its trades inside the retention window.

    trades are in insertion order, which is ascending observed_at.
    """

    token_id: str
    metadata: TokenMetadata
    trades: tuple[Trade, ...] = field(default_factory=tuple)

    @property
    def symbol(self) -> str:
        return self.metadata.symbol

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def dex(self) -> str:
        return self.metadata.dex

    def with_trade(self, trade: Trade) -> TokenRecord:
        """Return a copy with trade appended. Metadata is kept as is."""
        return TokenRecord(
            token_id=self.token_id,
            metadata=self.metadata,
            trades=(*self.trades, trade),
        )

    def pruned(self, now: datetime, retention: timedelta) -> TokenRecord:
        """Return a copy keeping only trades with now - observed_at < retention.

        Returns self when nothing is dropped.
        """
        kept = tuple(t for t in self.trades if now - t.observed_at < retention)
        if len(kept) == len(self.trades):
            return self
        return TokenRecord(token_id=self.token_id, metadata=self.metadata, trades=kept)

    @classmethod
    def create(
        cls,
        token_id: str,
        metadata: TokenMetadata | None = None,
        trades: tuple[Trade, ...] = (),
    ) -> TokenRecord:
        """Create a record for a newly observed token."""
        token_id = token_id.strip()
        if not token_id:
            raise ValueError("token_id must be non-empty")
        return cls(token_id=token_id, metadata=metadata or TokenMetadata(), trades=tuple(trades))
