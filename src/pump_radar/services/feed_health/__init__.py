"""Feed health tracking."""

from pump_radar.services.feed_health.feed_health_monitor import (
    FeedHealth,
    FeedHealthMonitor,
)

__all__ = ["FeedHealth", "FeedHealthMonitor"]
