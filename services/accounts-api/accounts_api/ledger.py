"""In-memory ledger holding accounts and their balances."""

from __future__ import annotations

import itertools
from collections import defaultdict
from datetime import datetime, timezone
from threading import Lock
from typing import Callable, DefaultDict

from .domain.account import Account
from .domain.contracts import Amount, CreateAccountInput
from .domain.errors import AccountNotFound

IdFactory = Callable[[], str]
Clock = Callable[[], datetime]


def sequential_ids(prefix: str = "a", start: int = 1) -> IdFactory:
    """Return a factory producing ``a1``, ``a2``, ... for the lifetime of the process."""
    counter = itertools.count(start)
    return lambda: f"{prefix}{next(counter)}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AccountLedger:
    """Thread-safe store of accounts, balances and the per-user account index.

    All reads and writes happen under one lock so ``balance[id]`` exists exactly
    when ``account[id]`` does, and each account sits in the list of its owner.
    """

    def __init__(self, id_factory: IdFactory | None = None, clock: Clock | None = None) -> None:
        """Initialise empty storage; ``id_factory`` and ``clock`` are injectable for tests."""
        self._next_id = id_factory or sequential_ids()
        self._clock = clock or utc_now
        self._accounts: dict[str, Account] = {}
        self._by_user: DefaultDict[str, list[Account]] = defaultdict(list)
        self._balances: dict[str, Amount] = {}
        self._lock = Lock()

    def create_account(self, payload: CreateAccountInput) -> Account:
        """Open an account with a zero balance and append it to the owner's list."""
        with self._lock:
            account_id = self._next_id()
            if account_id in self._accounts:
                raise ValueError(f"id factory reused account id {account_id!r}")
            account = Account(
                account_id=account_id,
                user_id=payload.user_id,
                type=payload.type,
                created_at=self._clock(),
            )
            self._accounts[account_id] = account
            self._by_user[payload.user_id].append(account)
            self._balances[account_id] = 0
        return account

    def get_account(self, account_id: str) -> Account | None:
        """Return the account or ``None`` when the id is unknown."""
        with self._lock:
            return self._accounts.get(account_id)

    def get_balance(self, account_id: str) -> Amount:
        """Return the current balance, raising :class:`AccountNotFound` for unknown ids."""
        with self._lock:
            if account_id not in self._balances:
                raise AccountNotFound(account_id)
            return self._balances[account_id]

    def snapshot(self, account_id: str) -> tuple[Account, Amount] | None:
        """Read an account together with its balance in one consistent step."""
        with self._lock:
            account = self._accounts.get(account_id)
            if account is None:
                return None
            return account, self._balances[account_id]

    def list_accounts(self, user_id: str) -> list[Account]:
        """Return the user's accounts in creation order; unknown users yield ``[]``."""
        with self._lock:
            # .get() so lookups for unknown users don't grow the index
            return list(self._by_user.get(user_id, ()))

    def credit(self, account_id: str, amount: Amount) -> Amount:
        """Add a signed ``amount`` to the balance and return the new value.

        Negative results are allowed. Unknown ids raise :class:`AccountNotFound`
        without creating anything.
        """
        with self._lock:
            if account_id not in self._accounts:
                raise AccountNotFound(account_id)
            balance = self._balances[account_id] + amount
            self._balances[account_id] = balance
        return balance
