# -*- coding: utf-8 -*-
"""In-memory token ledger (keyed by token_id)."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from datetime import datetime, timedelta

from pump_radar.models.token_record import TokenMetadata, TokenRecord
from pump_radar.models.trade import Trade
from pump_radar.persistence.repositories.interfaces.token_ledger_repository import (
    ITokenLedgerRepository,
    LedgerEntry,
)

DEFAULT_RETENTION = timedelta(minutes=10)


def _key(token_id: str) -> str:
    return token_id.strip()


class InMemoryTokenLedgerRepository(ITokenLedgerRepository):
    """In-memory implementation of ITokenLedgerRepository.

    Writes are serialized by one asyncio.Lock and never await between reading
    a record and storing its replacement. Records are immutable, so snapshot()
    only has to copy the list of references.
    """

    def __init__(self, retention: timedelta = DEFAULT_RETENTION) -> None:
        """Initialize an empty ledger.

        Args:
            retention: Trades with now - observed_at >= retention are pruned.
        """
        if retention <= timedelta(0):
            raise ValueError("retention must be positive")
        self._retention = retention
        self._store: dict[str, TokenRecord] = {}
        self._lock = asyncio.Lock()

    @classmethod
    def from_seconds(cls, retention_seconds: float) -> InMemoryTokenLedgerRepository:
        """Build with retention given in seconds (as in IngestionSettings)."""
        return cls(retention=timedelta(seconds=retention_seconds))

    @property
    def retention(self) -> timedelta:
        return self._retention

    def _apply(
        self,
        token_id: str,
        metadata: TokenMetadata,
        trade: Trade,
        now: datetime,
    ) -> TokenRecord:
        """Append + prune for one token. Caller holds the lock."""
        k = _key(token_id)
        record = self._store.get(k)
        if record is None:
            record = TokenRecord.create(k, metadata)
        updated = record.with_trade(trade).pruned(now, self._retention)
        self._store[k] = updated
        return updated

    async def upsert_trade(
        self,
        token_id: str,
        metadata: TokenMetadata,
        trade: Trade,
        *,
        now: datetime | None = None,
    ) -> TokenRecord:
        """Create if missing, append, prune relative to now (defaults to trade.observed_at)."""
        async with self._lock:
            return self._apply(token_id, metadata, trade, now or trade.observed_at)

    async def upsert_trades(
        self,
        entries: Iterable[LedgerEntry],
        *,
        now: datetime,
    ) -> list[TokenRecord]:
        """Apply a batch under a single lock acquisition; return each touched record once."""
        touched: dict[str, TokenRecord] = {}
        async with self._lock:
            for token_id, metadata, trade in entries:
                record = self._apply(token_id, metadata, trade, now)
                touched[record.token_id] = record
        return list(touched.values())

    async def get(self, token_id: str) -> TokenRecord | None:
        """Return the record for token_id, or None if missing."""
        return self._store.get(_key(token_id))

    async def snapshot(self) -> list[TokenRecord]:
        """Return all records in first observation order."""
        return list(self._store.values())

    async def prune_all(self, now: datetime) -> int:
        """Prune every record relative to now; return the number of trades dropped."""
        dropped = 0
        async with self._lock:
            for k, record in self._store.items():
                pruned = record.pruned(now, self._retention)
                if pruned is not record:
                    dropped += len(record.trades) - len(pruned.trades)
                    self._store[k] = pruned
        return dropped

    async def count(self) -> int:
        """Return the number of distinct tokens."""
        return len(self._store)
