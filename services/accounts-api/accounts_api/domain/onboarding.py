"""Onboarding: create a user, open and fund an account, assign a product.

The steps run strictly in order and nothing is rolled back. If the catalog
rejects the assignment, the account and any initial credit stay in the
ledger and the catalog's error is returned to the caller unchanged. There is
no transaction spanning identity, the ledger and catalog, so an opened but
unassigned account is the accepted failure state.
"""

from __future__ import annotations

from enum import Enum
import logging

from .contracts import DEFAULT_ACCOUNT_TYPE, CreateAccountInput, OnboardingInput, OnboardingResult
from .errors import AccountsError
from .service import AccountService
from ..clients.downstream import DownstreamClient
from ..metrics import ONBOARDING

logger = logging.getLogger(__name__)


class OnboardingStep(str, Enum):
    start = "start"
    user_created = "user_created"
    account_opened = "account_opened"
    credited = "credited"
    assigned = "assigned"


class OnboardingOrchestrator:
    """Runs the onboarding sequence against the account service and downstream services."""

    def __init__(self, accounts: AccountService, downstream: DownstreamClient) -> None:
        self._accounts = accounts
        self._downstream = downstream

    def onboard(self, payload: OnboardingInput) -> OnboardingResult:
        """Execute every onboarding step, raising the first downstream failure as-is.

        Parameters
        ----------
        payload:
            Validated request; ``initial_credit`` of ``None`` skips the credit step.

        Raises
        ------
        AccountsError
            ``UpstreamError`` or ``UpstreamUnreachable`` from identity (nothing was
            created) or from catalog (the account remains, see the module docstring).
        """
        step = OnboardingStep.start
        account = None
        try:
            user = self._downstream.create_user(payload.name, payload.email)
            step = OnboardingStep.user_created

            account = self._accounts.open_account(
                CreateAccountInput(user_id=user.id, type=DEFAULT_ACCOUNT_TYPE)
            )
            step = OnboardingStep.account_opened

            if payload.initial_credit is not None:
                self._accounts.credit(account.account_id, payload.initial_credit)
                step = OnboardingStep.credited

            assignment = self._downstream.assign_product(payload.product_id, account.account_id)
            step = OnboardingStep.assigned
        except Exception as exc:
            reason = exc.message if isinstance(exc, AccountsError) else repr(exc)
            ONBOARDING.labels(outcome="failed", step=step.value).inc()
            if account is not None:
                logger.warning(
                    "onboarding left account %s without product %s after %s: %s",
                    account.account_id,
                    payload.product_id,
                    step.value,
                    reason,
                )
            else:
                logger.warning("onboarding failed at %s: %s", step.value, reason)
            raise

        balance = self._accounts.balance(account.account_id)
        ONBOARDING.labels(outcome="completed", step=step.value).inc()
        logger.info(
            "onboarded user %s with account %s and product %s",
            user.id,
            account.account_id,
            payload.product_id,
        )
        return OnboardingResult(user=user, account=account, assignment=assignment, balance=balance)
