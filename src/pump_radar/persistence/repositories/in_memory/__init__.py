"""In-memory repository implementations."""

from pump_radar.persistence.repositories.in_memory.token_ledger_repository import (
    InMemoryTokenLedgerRepository,
)

__all__ = ["InMemoryTokenLedgerRepository"]
