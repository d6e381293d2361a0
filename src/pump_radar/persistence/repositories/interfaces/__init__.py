# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/."""

from pump_radar.persistence.repositories.interfaces.token_ledger_repository import (
    ITokenLedgerRepository,
    LedgerEntry,
)

__all__ = ["ITokenLedgerRepository", "LedgerEntry"]
