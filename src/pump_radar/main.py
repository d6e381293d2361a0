# -*- coding: utf-8 -*-
"""
Entry point for the pump-radar service.

Orchestrates: logging, settings, container, feed health monitor, ingestion
poller, optional ledger sweeper, HTTP server, shutdown (SIGINT/SIGTERM or
CancelledError).
Trades flow: trade feed -> TradeIngestor -> token ledger -> RankingService -> HTTP.

Run with: python -m pump_radar.main
"""
from __future__ import annotations

import asyncio
import signal
import structlog
from typing import Any

from pump_radar.DI import Container
from pump_radar.config import get_settings
from pump_radar.exceptions import MissingRequiredConfigError
from pump_radar.logging.config import configure_logging


def _setup_signals(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, shutdown_event.set)
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


async def _cancel(task: asyncio.Task[Any] | None) -> None:
    if task is None:
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


async def run() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger = structlog.get_logger("main")
    if not settings.feed.api_key:
        logger.error(
            "main_missing_feed_api_key",
            message="FEED__API_KEY (or BITQUERY_API_KEY) is not set",
        )
        raise MissingRequiredConfigError("FEED__API_KEY")

    container = Container()
    ingestor = container.trade_ingestor()
    sweeper = container.ledger_sweeper()
    feed_health = container.feed_health_monitor()
    api_server = container.api_server()
    http_client = container.http_client()

    shutdown_event = asyncio.Event()
    _setup_signals(shutdown_event)
    feed_health.start()

    ingest_task = asyncio.create_task(ingestor.poll())
    sweep_task: asyncio.Task[None] | None = None
    if settings.ingestion.sweep_enabled:
        sweep_task = asyncio.create_task(sweeper.run())

    logger.info(
        "main_started",
        poll_seconds=settings.ingestion.poll_seconds,
        protocols=settings.ingestion.protocols,
        sweep_enabled=settings.ingestion.sweep_enabled,
        server_port=settings.server.port,
    )
    try:
        await api_server.start()
        await shutdown_event.wait()
    finally:
        await _cancel(ingest_task)
        await _cancel(sweep_task)
        await api_server.stop()
        feed_health.stop()
        await http_client.aclose()
        logger.info("main_shutdown_complete")


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
