"""HTTP surface of the accounts service."""
