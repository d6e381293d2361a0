"""Ranking engine: scoring functions and the ranking service."""

from pump_radar.services.ranking.dto import SurgeRanking, TrendingRanking, VolumeRanking
from pump_radar.services.ranking.ranking_service import RankingService
from pump_radar.services.ranking.scoring import (
    SurgeMetrics,
    TrendingMetrics,
    TrendingWeights,
    price_change_pct,
    surge_metrics,
    total_volume,
    trades_in_window,
    trending_metrics,
)

__all__ = [
    "RankingService",
    "SurgeMetrics",
    "SurgeRanking",
    "TrendingMetrics",
    "TrendingRanking",
    "TrendingWeights",
    "VolumeRanking",
    "price_change_pct",
    "surge_metrics",
    "total_volume",
    "trades_in_window",
    "trending_metrics",
]
