# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from pump_radar.api.server import ApiServer
from pump_radar.clients.http import AsyncHttpClient
from pump_radar.clients.trade_feed import TradeFeedClient
from pump_radar.config import Settings, get_settings
from pump_radar.events.bus import get_event_bus
from pump_radar.persistence.repositories.in_memory import InMemoryTokenLedgerRepository
from pump_radar.services.feed_health import FeedHealthMonitor
from pump_radar.services.ingestion import LedgerSweeper, TradeIngestor
from pump_radar.services.ranking import RankingService


def _build_token_ledger(settings: Settings) -> InMemoryTokenLedgerRepository:
    """Build the ledger with retention from settings."""
    return InMemoryTokenLedgerRepository.from_seconds(settings.ingestion.retention_seconds)


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, feed client, ledger, ingestion, ranking, API."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    trade_feed_client = providers.Singleton(
        TradeFeedClient,
        http_client=http_client,
        settings=config,
    )

    event_bus = providers.Callable(get_event_bus)

    token_ledger = providers.Singleton(_build_token_ledger, config)

    trade_ingestor = providers.Singleton(
        TradeIngestor,
        settings=config,
        trade_feed=trade_feed_client,
        ledger=token_ledger,
        event_bus=event_bus,
    )

    ledger_sweeper = providers.Singleton(
        LedgerSweeper,
        settings=config,
        ledger=token_ledger,
    )

    ranking_service = providers.Singleton(
        RankingService,
        ledger=token_ledger,
        settings=config,
    )

    feed_health_monitor = providers.Singleton(
        FeedHealthMonitor,
        event_bus=event_bus,
    )

    api_server = providers.Singleton(
        ApiServer,
        settings=config,
        ranking_service=ranking_service,
        ledger=token_ledger,
        feed_health=feed_health_monitor,
    )
