"""Clients for downstream platform services."""
