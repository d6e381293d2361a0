# -*- coding: utf-8 -*-
"""Bitquery trade feed client (Solana DEXTrades over GraphQL)."""

from __future__ import annotations

import time
import structlog
from typing import TYPE_CHECKING, Any, Callable, Optional, cast
from structlog.contextvars import bound_contextvars

from pump_radar.clients.trade_feed.schema import DexTradeSchema
from pump_radar.config import Settings
from pump_radar.exceptions import MalformedFeedPayloadError

if TYPE_CHECKING:
    from pump_radar.clients.http import AsyncHttpClient

DEX_TRADES_QUERY = """
{
  Solana {
    DEXTrades(limit: {count: %(limit)d}, orderBy: {descending: Block_Time}) {
      Trade {
        Dex { ProtocolName }
        Buy {
          AmountInUSD
          Price
          Currency {
            Symbol
            Name
            MintAddress
          }
        }
      }
      Block { Time }
    }
  }
}
"""


def build_dex_trades_query(limit: int) -> str:
    """Return the GraphQL query for the `limit` most recent trades, newest first."""
    return DEX_TRADES_QUERY % {"limit": max(1, int(limit))}


def extract_dex_trades(payload: Any) -> list[DexTradeSchema]:
    """Return data.Solana.DEXTrades from a GraphQL response.

    Raises:
        MalformedFeedPayloadError: errors payload, or any level missing / of the wrong type.
    """
    if not isinstance(payload, dict):
        raise MalformedFeedPayloadError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )
    body = cast(dict[str, Any], payload)
    errors = body.get("errors")
    if errors:
        raise MalformedFeedPayloadError(f"Feed returned GraphQL errors: {errors!r}"[:500])
    data = body.get("data")
    solana = data.get("Solana") if isinstance(data, dict) else None
    trades = solana.get("DEXTrades") if isinstance(solana, dict) else None
    if not isinstance(trades, list):
        raise MalformedFeedPayloadError("Missing data.Solana.DEXTrades list")
    return [cast(DexTradeSchema, t) for t in cast(list[Any], trades) if isinstance(t, dict)]


class TradeFeedClient:
    """Client for the Bitquery streaming GraphQL endpoint (bearer auth)."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.feed url and api_key).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        api_key = self._settings.feed.api_key
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        return headers

    async def fetch_recent_trades(self, limit: int = 100) -> list[DexTradeSchema]:
        """Fetch the most recent DEX trades (newest first).

        Args:
            limit: Number of trades to request.

        Returns:
            Raw DEXTrades records.

        Raises:
            FeedUnavailableError: Transport failure or non-2xx response.
            MalformedFeedPayloadError: Response body has an unexpected shape.
        """
        with bound_contextvars(trade_feed_limit=limit):
            started = time.perf_counter()
            payload = await self._http.post(
                self._settings.feed.url,
                json={"query": build_dex_trades_query(limit)},
                headers=self._headers(),
            )
            latency_ms = (time.perf_counter() - started) * 1000.0
            try:
                trades = extract_dex_trades(payload)
            except MalformedFeedPayloadError as e:
                e.url = self._settings.feed.url
                self._logger.warning(
                    "trade_feed_malformed_payload",
                    error_message=str(e),
                    feed_latency_ms=round(latency_ms, 1),
                )
                raise
            self._logger.debug(
                "trade_feed_fetched",
                feed_latency_ms=round(latency_ms, 1),
                trade_feed_records=len(trades),
            )
            return trades
