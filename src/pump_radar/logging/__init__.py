"""Logging setup (structlog + Logfire)."""

from pump_radar.logging.config import configure_logging

__all__ = ["configure_logging"]
