"""HTTP query surface."""

from pump_radar.api.server import ApiServer, create_app

__all__ = ["ApiServer", "create_app"]
