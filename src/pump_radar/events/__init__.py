# -*- coding: utf-8 -*-
"""Event bus and event types."""

from pump_radar.events.bus import get_event_bus, set_event_bus
from pump_radar.events.ingestion import (
    IngestionCycleCompletedEvent,
    IngestionCycleFailedEvent,
)

__all__ = [
    "get_event_bus",
    "set_event_bus",
    "IngestionCycleCompletedEvent",
    "IngestionCycleFailedEvent",
]
