"""Normalization of raw feed records into (token_id, metadata, Trade)."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime
from typing import Any, cast

from pump_radar.clients.trade_feed.schema import DexTradeSchema
from pump_radar.exceptions import MalformedFeedRecordError
from pump_radar.models.token_record import TokenMetadata
from pump_radar.models.trade import Trade
from pump_radar.persistence.repositories.interfaces.token_ledger_repository import LedgerEntry
from pump_radar.utils.validation import clean_str, to_non_negative_float


@dataclass(frozen=True, slots=True)
class NormalizedTrade:
    """A feed record accepted for the ledger."""

    token_id: str
    metadata: TokenMetadata
    trade: Trade

    def as_entry(self) -> LedgerEntry:
        return (self.token_id, self.metadata, self.trade)


def _section(parent: Any, key: str) -> dict[str, Any]:
    """Return parent[key] when both are dicts, else an empty dict."""
    if not isinstance(parent, dict):
        return {}
    value = cast(dict[str, Any], parent).get(key)
    return cast(dict[str, Any], value) if isinstance(value, dict) else {}


def normalize_trade_record(
    record: DexTradeSchema | dict[str, Any],
    allowed_protocols: Collection[str],
    observed_at: datetime,
) -> NormalizedTrade | None:
    """Turn one DEXTrades item into a NormalizedTrade.

    Protocol matching is case-insensitive; allowed_protocols must be lower-case.
    Volume and price fall back to 0 when missing or not numeric.

    Returns:
        None if the protocol is not in allowed_protocols.

    Raises:
        MalformedFeedRecordError: protocol name or buy-side mint address missing.
    """
    trade = _section(record, "Trade")
    protocol = clean_str(_section(trade, "Dex").get("ProtocolName"))
    if protocol is None:
        raise MalformedFeedRecordError("Record has no Dex.ProtocolName", field="protocol")
    dex = protocol.lower()
    if dex not in allowed_protocols:
        return None

    buy = _section(trade, "Buy")
    currency = _section(buy, "Currency")
    token_id = clean_str(currency.get("MintAddress"))
    if token_id is None:
        raise MalformedFeedRecordError("Record has no Buy.Currency.MintAddress", field="token_id")

    return NormalizedTrade(
        token_id=token_id,
        metadata=TokenMetadata(
            symbol=clean_str(currency.get("Symbol")) or "",
            name=clean_str(currency.get("Name")) or "",
            dex=dex,
        ),
        trade=Trade(
            observed_at=observed_at,
            volume_usd=to_non_negative_float(buy.get("AmountInUSD")),
            price=to_non_negative_float(buy.get("Price")),
        ),
    )
