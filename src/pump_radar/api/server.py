# -*- coding: utf-8 -*-
"""HTTP query surface (aiohttp.web): ranking endpoints and health.

GET /top-meme, /top-trending, /top-surge return JSON arrays of at most
settings.ranking.limit entries; GET /health returns feed and ledger status.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Optional

import structlog
from aiohttp import web

from pump_radar.persistence.repositories.interfaces.token_ledger_repository import (
    ITokenLedgerRepository,
)
from pump_radar.services.feed_health import FeedHealthMonitor
from pump_radar.services.ranking import RankingService

if TYPE_CHECKING:
    from pump_radar.config import Settings

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

RANKING_SERVICE_KEY = web.AppKey("ranking_service", RankingService)
LEDGER_KEY = web.AppKey("token_ledger", ITokenLedgerRepository)
FEED_HEALTH_KEY = web.AppKey("feed_health", FeedHealthMonitor)
CORS_ORIGIN_KEY = web.AppKey("cors_allow_origin", str)

_logger = structlog.get_logger("ApiServer")


@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Answer preflights and add CORS headers to every response."""
    if request.method == "OPTIONS":
        response: web.StreamResponse = web.Response(status=204)
    else:
        response = await handler(request)
    response.headers["Access-Control-Allow-Origin"] = request.app[CORS_ORIGIN_KEY]
    response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Log unexpected handler errors and answer with a generic 500."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception as e:
        _logger.exception(
            "api_request_failed",
            http_path=request.path,
            error_type=type(e).__name__,
            error_message=str(e),
        )
        return web.json_response({"error": "internal_error"}, status=500)


async def top_meme(request: web.Request) -> web.Response:
    ranking = await request.app[RANKING_SERVICE_KEY].top_by_volume()
    return web.json_response([e.to_dict() for e in ranking])


async def top_trending(request: web.Request) -> web.Response:
    ranking = await request.app[RANKING_SERVICE_KEY].top_trending()
    return web.json_response([e.to_dict() for e in ranking])


async def top_surge(request: web.Request) -> web.Response:
    ranking = await request.app[RANKING_SERVICE_KEY].top_surge()
    return web.json_response([e.to_dict() for e in ranking])


async def health(request: web.Request) -> web.Response:
    body: dict[str, Any] = {"status": "ok", "tokens": await request.app[LEDGER_KEY].count()}
    monitor = request.app.get(FEED_HEALTH_KEY)
    if monitor is not None:
        feed = monitor.health()
        body.update(feed.to_dict())
        body["status"] = feed.status
    return web.json_response(body)


def create_app(
    ranking_service: RankingService,
    ledger: ITokenLedgerRepository,
    feed_health: Optional[FeedHealthMonitor] = None,
    *,
    cors_allow_origin: str = "*",
) -> web.Application:
    """Build the aiohttp application with the ranking and health routes."""
    app = web.Application(middlewares=[cors_middleware, error_middleware])
    app[RANKING_SERVICE_KEY] = ranking_service
    app[LEDGER_KEY] = ledger
    app[CORS_ORIGIN_KEY] = cors_allow_origin
    if feed_health is not None:
        app[FEED_HEALTH_KEY] = feed_health
    app.router.add_get("/top-meme", top_meme)
    app.router.add_get("/top-trending", top_trending)
    app.router.add_get("/top-surge", top_surge)
    app.router.add_get("/health", health)
    return app


class ApiServer:
    """Runs the aiohttp application on settings.server host/port."""

    def __init__(
        self,
        settings: Settings,
        ranking_service: RankingService,
        ledger: ITokenLedgerRepository,
        feed_health: Optional[FeedHealthMonitor] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._app = create_app(
            ranking_service,
            ledger,
            feed_health,
            cors_allow_origin=settings.server.cors_allow_origin,
        )
        self._runner: Optional[web.AppRunner] = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def app(self) -> web.Application:
        return self._app

    async def start(self) -> None:
        """Bind and start serving. Idempotent."""
        if self._runner is not None:
            return
        server = self._settings.server
        runner = web.AppRunner(self._app)
        await runner.setup()
        site = web.TCPSite(runner, server.host, server.port)
        await site.start()
        self._runner = runner
        self._logger.info(
            "api_server_started",
            server_host=server.host,
            server_port=server.port,
        )

    async def stop(self) -> None:
        """Stop serving and release the socket. Idempotent."""
        runner = self._runner
        self._runner = None
        if runner is not None:
            await runner.cleanup()
            self._logger.info("api_server_stopped")
