"""Abstract interface for the token ledger (token_id -> TokenRecord)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from pump_radar.models.token_record import TokenMetadata, TokenRecord
from pump_radar.models.trade import Trade

LedgerEntry = tuple[str, TokenMetadata, Trade]
"""(token_id, metadata, trade) as produced by one normalized feed record."""


class ITokenLedgerRepository(ABC):
    """Interface for the per-token rolling trade window.

    Writers go through upsert_trade/upsert_trades/prune_all; readers use
    snapshot/get and must only ever observe whole records.
    """

    @abstractmethod
    async def upsert_trade(
        self,
        token_id: str,
        metadata: TokenMetadata,
        trade: Trade,
        *,
        now: datetime | None = None,
    ) -> TokenRecord:
        """Create the record if missing (with metadata), append trade, prune relative to now.

        now defaults to trade.observed_at. Metadata of an existing record is never changed.
        """
        ...

    @abstractmethod
    async def upsert_trades(
        self,
        entries: Iterable[LedgerEntry],
        *,
        now: datetime,
    ) -> list[TokenRecord]:
        """Apply a whole ingestion batch in order as one atomic write; return touched records."""
        ...

    @abstractmethod
    async def get(self, token_id: str) -> TokenRecord | None:
        """Return the record for token_id, or None if never observed."""
        ...

    @abstractmethod
    async def snapshot(self) -> list[TokenRecord]:
        """Return all records (first observation order) as a point-in-time view."""
        ...

    @abstractmethod
    async def prune_all(self, now: datetime) -> int:
        """Prune every record relative to now. Return the number of trades dropped."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Return the number of distinct tokens ever observed."""
        ...
