# -*- coding: utf-8 -*-
"""Ingestion events."""

from pump_radar.events.ingestion.ingestion_events import (
    IngestionCycleCompletedEvent,
    IngestionCycleFailedEvent,
)

__all__ = ["IngestionCycleCompletedEvent", "IngestionCycleFailedEvent"]
