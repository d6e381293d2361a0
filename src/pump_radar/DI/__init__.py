"""Dependency injection."""

from pump_radar.DI.container import Container

__all__ = ["Container"]
