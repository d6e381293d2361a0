# -*- coding: utf-8 -*-
"""Application services."""

from pump_radar.services.feed_health import FeedHealth, FeedHealthMonitor
from pump_radar.services.ingestion import (
    IngestionResult,
    LedgerSweeper,
    TradeIngestor,
)
from pump_radar.services.ranking import (
    RankingService,
    SurgeRanking,
    TrendingRanking,
    VolumeRanking,
)

__all__ = [
    "FeedHealth",
    "FeedHealthMonitor",
    "IngestionResult",
    "LedgerSweeper",
    "RankingService",
    "SurgeRanking",
    "TradeIngestor",
    "TrendingRanking",
    "VolumeRanking",
]
