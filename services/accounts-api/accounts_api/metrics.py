"""Prometheus collectors shared across the accounts service."""

from __future__ import annotations

from prometheus_client import Counter

ACCOUNTS_CREATED = Counter(
    "accounts_created_total",
    "Accounts opened in the ledger.",
)
ACCOUNT_CREDITS = Counter(
    "account_credits_total",
    "Credit operations applied to account balances.",
)
DOWNSTREAM_REQUESTS = Counter(
    "downstream_requests_total",
    "Calls made to the identity and catalog services.",
    ["service", "outcome"],
)
ONBOARDING = Counter(
    "onboarding_total",
    "Onboarding attempts by outcome and the last step reached.",
    ["outcome", "step"],
)
