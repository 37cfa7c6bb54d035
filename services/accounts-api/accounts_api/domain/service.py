"""Account workflows over the in-memory ledger."""

from __future__ import annotations

import logging

from .account import Account
from .contracts import Amount, CreateAccountInput
from .errors import AccountNotFound
from ..clients.downstream import DownstreamClient
from ..ledger import AccountLedger
from ..metrics import ACCOUNTS_CREATED, ACCOUNT_CREDITS

logger = logging.getLogger(__name__)


class AccountService:
    """Account CRUD backed by the ledger, optionally checking owners with identity."""

    def __init__(
        self,
        ledger: AccountLedger,
        downstream: DownstreamClient,
        *,
        validate_owner: bool = True,
    ) -> None:
        """Store dependencies used to open accounts and move balances."""
        self._ledger = ledger
        self._downstream = downstream
        self._validate_owner = validate_owner

    def create_account(self, payload: CreateAccountInput) -> Account:
        """Open an account, first confirming the user exists when validation is enabled.

        Identity failures propagate unchanged and leave the ledger untouched.
        """
        if self._validate_owner:
            self._downstream.fetch_user(payload.user_id)
        return self.open_account(payload)

    def open_account(self, payload: CreateAccountInput) -> Account:
        """Create the ledger entry without contacting identity."""
        account = self._ledger.create_account(payload)
        ACCOUNTS_CREATED.inc()
        logger.info("opened account %s for user %s", account.account_id, account.user_id)
        return account

    def get_account(self, account_id: str) -> tuple[Account, Amount]:
        snapshot = self._ledger.snapshot(account_id)
        if snapshot is None:
            raise AccountNotFound(account_id)
        return snapshot

    def list_accounts(self, user_id: str) -> list[Account]:
        return self._ledger.list_accounts(user_id)

    def credit(self, account_id: str, amount: Amount) -> Amount:
        balance = self._ledger.credit(account_id, amount)
        ACCOUNT_CREDITS.inc()
        logger.debug("credited %s to %s, balance now %s", amount, account_id, balance)
        return balance

    def balance(self, account_id: str) -> Amount:
        return self._ledger.get_balance(account_id)
