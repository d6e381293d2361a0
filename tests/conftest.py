# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any

import pytest

from pump_radar.config import FeedSettings, IngestionSettings, RankingSettings, ServerSettings
from pump_radar.models.token_record import TokenMetadata
from pump_radar.models.trade import Trade
from pump_radar.persistence.repositories.in_memory.token_ledger_repository import (
    InMemoryTokenLedgerRepository,
)


class FakeEventBus:
    """Minimal event bus fake: records dispatched events and registered handlers."""

    def __init__(self) -> None:
        self.dispatched: list[Any] = []
        self.handlers: dict[str, list[Any]] = {}

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)
        for handler in self.handlers.get(type(event).__name__, []):
            handler(event)

    def on(self, event_type: type, handler: Any) -> None:
        self.handlers.setdefault(event_type.__name__, []).append(handler)


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def token_id() -> str:
    """Default pump.fun style mint address used by tests."""
    return "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgpump"


@pytest.fixture
def metadata() -> TokenMetadata:
    return TokenMetadata(symbol="WIF", name="dogwifhat", dex="pump")


@pytest.fixture
def trade_at(now_utc: datetime) -> Callable[..., Trade]:
    """Build a trade observed `age` seconds before now_utc."""

    def _build(age: float = 0.0, volume: float = 0.0, price: float = 0.0) -> Trade:
        return Trade(
            observed_at=now_utc - timedelta(seconds=age),
            volume_usd=volume,
            price=price,
        )

    return _build


@pytest.fixture
def ledger() -> InMemoryTokenLedgerRepository:
    """Fresh in-memory ledger (10 minute retention) per test."""
    return InMemoryTokenLedgerRepository()


@pytest.fixture
def event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def settings_factory() -> Callable[..., Any]:
    """Build a settings object with only the sections services read."""

    def _build(**overrides: Any) -> Any:
        return SimpleNamespace(
            feed=FeedSettings(**overrides.pop("feed", {"api_key": "test-key"})),
            ingestion=IngestionSettings(**overrides.pop("ingestion", {})),
            ranking=RankingSettings(**overrides.pop("ranking", {})),
            server=ServerSettings(**overrides.pop("server", {})),
        )

    return _build


@pytest.fixture
def settings(settings_factory: Callable[..., Any]) -> Any:
    return settings_factory()
