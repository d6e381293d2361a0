"""Persistence layer (repositories)."""

from pump_radar.persistence.repositories import (
    InMemoryTokenLedgerRepository,
    ITokenLedgerRepository,
    LedgerEntry,
)

__all__ = [
    "ITokenLedgerRepository",
    "InMemoryTokenLedgerRepository",
    "LedgerEntry",
]
