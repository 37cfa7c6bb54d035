"""Error taxonomy surfaced by the accounts service.

Every error carries the HTTP status it maps to; the API layer renders it as
``{"error": message}``.
"""

from __future__ import annotations


class AccountsError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequest(AccountsError):
    """Client input is missing or malformed."""

    status_code = 400


class NotFound(AccountsError):
    status_code = 404


class AccountNotFound(NotFound):
    def __init__(self, account_id: str) -> None:
        super().__init__("account not found")
        self.account_id = account_id


class UpstreamError(AccountsError):
    """A downstream service answered with a non-2xx status.

    The upstream status code is kept verbatim so callers see exactly what the
    identity or catalog service returned.
    """

    def __init__(self, service: str, status_code: int, message: str) -> None:
        super().__init__(message, status_code)
        self.service = service


class UpstreamUnreachable(AccountsError):
    """Transport failure or timeout while calling a downstream service."""

    status_code = 502

    def __init__(self, service: str, detail: str | None = None) -> None:
        super().__init__(f"{service} service unreachable")
        self.service = service
        self.detail = detail


class InternalError(AccountsError):
    status_code = 500
