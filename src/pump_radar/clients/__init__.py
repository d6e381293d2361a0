"""HTTP and feed clients."""

from pump_radar.clients.http import AsyncHttpClient
from pump_radar.clients.trade_feed import TradeFeedClient

__all__ = [
    "AsyncHttpClient",
    "TradeFeedClient",
]
