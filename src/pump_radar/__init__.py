"""pump-radar: rolling-window trade aggregation and token rankings for Solana DEX feeds."""

from pump_radar.clients import AsyncHttpClient, TradeFeedClient
from pump_radar.config import get_settings
from pump_radar.DI import Container
from pump_radar.services import RankingService, TradeIngestor

__version__ = "0.1.0"
__all__ = [
    "AsyncHttpClient",
    "Container",
    "RankingService",
    "TradeFeedClient",
    "TradeIngestor",
    "get_settings",
]
