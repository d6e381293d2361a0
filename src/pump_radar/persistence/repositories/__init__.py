# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory)."""

from pump_radar.persistence.repositories.interfaces import (
    ITokenLedgerRepository,
    LedgerEntry,
)
from pump_radar.persistence.repositories.in_memory import (
    InMemoryTokenLedgerRepository,
)

__all__ = [
    "ITokenLedgerRepository",
    "InMemoryTokenLedgerRepository",
    "LedgerEntry",
]
