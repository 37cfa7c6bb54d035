"""Unit tests for the onboarding orchestrator using an in-process downstream fake."""

from __future__ import annotations

import pytest
from prometheus_client import REGISTRY

from platform_schemas import Assignment, User

from accounts_api.domain.contracts import OnboardingInput
from accounts_api.domain.errors import UpstreamError, UpstreamUnreachable
from accounts_api.domain.onboarding import OnboardingOrchestrator
from accounts_api.domain.service import AccountService
from accounts_api.ledger import AccountLedger


class FakeDownstream:
    """Records calls and fails on demand."""

    def __init__(self, ledger: AccountLedger) -> None:
        self.ledger = ledger
        self.calls: list[str] = []
        self.user_error: Exception | None = None
        self.assign_error: Exception | None = None
        self.lock_free_during_assign: bool | None = None

    def fetch_user(self, user_id: str) -> User:
        self.calls.append("fetch_user")
        return User(id=user_id)

    def create_user(self, name: str, email: str) -> User:
        self.calls.append("create_user")
        if self.user_error:
            raise self.user_error
        return User(id="u1", name=name, email=email)

    def assign_product(self, product_id: str, account_id: str) -> Assignment:
        self.calls.append("assign_product")
        # non-blocking so a held lock fails the test instead of hanging it
        self.lock_free_during_assign = self.ledger._lock.acquire(blocking=False)
        if self.lock_free_during_assign:
            self.ledger._lock.release()
        if self.assign_error:
            raise self.assign_error
        return Assignment(id="as1", product_id=product_id, account_id=account_id)


@pytest.fixture()
def harness():
    ledger = AccountLedger()
    downstream = FakeDownstream(ledger)
    service = AccountService(ledger, downstream)  # type: ignore[arg-type]
    return OnboardingOrchestrator(service, downstream), ledger, downstream  # type: ignore[arg-type]


def _input(**overrides) -> OnboardingInput:
    values = {"name": "Ada", "email": "ada@example.com", "product_id": "p1"}
    values.update(overrides)
    return OnboardingInput(**values)


def test_successful_onboarding_runs_steps_in_order(harness):
    orchestrator, ledger, downstream = harness

    result = orchestrator.onboard(_input(initial_credit=100))

    assert downstream.calls == ["create_user", "assign_product"]
    assert result.user.id == "u1"
    assert result.account.user_id == "u1"
    assert result.account.type == "standard"
    assert result.assignment.product_id == "p1"
    assert result.assignment.account_id == result.account.account_id
    assert result.balance == 100
    assert downstream.lock_free_during_assign is True
    assert ledger.get_balance(result.account.account_id) == 100


def test_without_initial_credit_balance_stays_zero(harness):
    orchestrator, _, _ = harness
    assert orchestrator.onboard(_input()).balance == 0


def test_negative_initial_credit_is_applied(harness):
    orchestrator, _, _ = harness
    assert orchestrator.onboard(_input(initial_credit=-5)).balance == -5


def test_identity_failure_leaves_ledger_untouched(harness):
    orchestrator, ledger, downstream = harness
    downstream.user_error = UpstreamError("identity", 400, "name and email are required")

    with pytest.raises(UpstreamError) as excinfo:
        orchestrator.onboard(_input(initial_credit=10))

    assert excinfo.value.status_code == 400
    assert downstream.calls == ["create_user"]
    assert ledger.list_accounts("u1") == []


def test_catalog_failure_keeps_account_and_credit(harness):
    orchestrator, ledger, downstream = harness
    downstream.assign_error = UpstreamError("catalog", 404, "product not found")

    with pytest.raises(UpstreamError) as excinfo:
        orchestrator.onboard(_input(product_id="unknown-x", initial_credit=40))

    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "product not found"
    (account,) = ledger.list_accounts("u1")
    assert ledger.get_balance(account.account_id) == 40


def test_catalog_unreachable_propagates_unchanged(harness):
    orchestrator, ledger, downstream = harness
    downstream.assign_error = UpstreamUnreachable("catalog", "timed out")

    with pytest.raises(UpstreamUnreachable) as excinfo:
        orchestrator.onboard(_input())

    assert excinfo.value.status_code == 502
    assert len(ledger.list_accounts("u1")) == 1


def _failed_count(step: str) -> float:
    return REGISTRY.get_sample_value("onboarding_total", {"outcome": "failed", "step": step}) or 0.0


def test_unexpected_error_is_counted_as_failed_onboarding():
    ledger = AccountLedger(id_factory=lambda: "a1")
    downstream = FakeDownstream(ledger)
    service = AccountService(ledger, downstream)  # type: ignore[arg-type]
    orchestrator = OnboardingOrchestrator(service, downstream)  # type: ignore[arg-type]
    orchestrator.onboard(_input())
    before = _failed_count("user_created")

    with pytest.raises(ValueError):
        orchestrator.onboard(_input())

    assert _failed_count("user_created") == before + 1
    assert downstream.calls == ["create_user", "assign_product", "create_user"]
