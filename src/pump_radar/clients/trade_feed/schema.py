"""Bitquery Solana DEXTrades response types (only the fields we query)."""

from __future__ import annotations

from typing import TypedDict


class CurrencySchema(TypedDict, total=False):
    Symbol: str
    Name: str
    MintAddress: str


class BuySideSchema(TypedDict, total=False):
    """Buy side of the trade. AmountInUSD and Price may arrive as numbers or strings."""

    AmountInUSD: float | str
    Price: float | str
    Currency: CurrencySchema


class DexSchema(TypedDict, total=False):
    ProtocolName: str


class TradeSchema(TypedDict, total=False):
    Dex: DexSchema
    Buy: BuySideSchema


class BlockSchema(TypedDict, total=False):
    Time: str


class DexTradeSchema(TypedDict, total=False):
    """One item of data.Solana.DEXTrades."""

    Trade: TradeSchema
    Block: BlockSchema
