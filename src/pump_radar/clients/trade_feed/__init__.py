"""Trade feed client and response schema."""

from pump_radar.clients.trade_feed.schema import (
    BuySideSchema,
    CurrencySchema,
    DexSchema,
    DexTradeSchema,
    TradeSchema,
)
from pump_radar.clients.trade_feed.trade_feed import (
    TradeFeedClient,
    build_dex_trades_query,
    extract_dex_trades,
)

__all__ = [
    "BuySideSchema",
    "CurrencySchema",
    "DexSchema",
    "DexTradeSchema",
    "TradeFeedClient",
    "TradeSchema",
    "build_dex_trades_query",
    "extract_dex_trades",
]
