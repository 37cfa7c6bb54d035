"""Accounts service: ledger, onboarding orchestration and HTTP API."""
