# -*- coding: utf-8 -*-
"""Domain models."""

from pump_radar.models.token_record import TokenMetadata, TokenRecord
from pump_radar.models.trade import Trade

__all__ = [
    "TokenMetadata",
    "TokenRecord",
    "Trade",
]
