"""Ingestion services: feed polling, normalization and ledger sweeping."""

from pump_radar.services.ingestion.ledger_sweeper import LedgerSweeper
from pump_radar.services.ingestion.trade_ingestor import IngestionResult, TradeIngestor
from pump_radar.services.ingestion.trade_normalizer import (
    NormalizedTrade,
    normalize_trade_record,
)

__all__ = [
    "IngestionResult",
    "LedgerSweeper",
    "NormalizedTrade",
    "TradeIngestor",
    "normalize_trade_record",
]
