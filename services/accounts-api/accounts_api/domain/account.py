from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Account:
    """Account opened for a user; balances live in the ledger, not here."""

    account_id: str
    user_id: str
    type: str
    created_at: datetime
