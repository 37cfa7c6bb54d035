"""JSON-over-HTTP client for the identity and catalog services."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from platform_schemas import Assignment, User

from ..domain.errors import UpstreamError, UpstreamUnreachable
from ..metrics import DOWNSTREAM_REQUESTS

logger = logging.getLogger(__name__)

IDENTITY = "identity"
CATALOG = "catalog"


class DownstreamClient:
    """Calls the identity and catalog services and normalises their outcomes.

    Non-2xx answers raise :class:`UpstreamError` carrying the upstream status
    and the body's ``error`` field (or the reason phrase). Transport failures
    and timeouts raise :class:`UpstreamUnreachable`. Nothing is retried.
    """

    def __init__(
        self,
        identity_base_url: str,
        catalog_base_url: str,
        *,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create the underlying ``httpx.Client``; ``transport`` lets tests stub the network."""
        self._base_urls = {
            IDENTITY: identity_base_url.rstrip("/"),
            CATALOG: catalog_base_url.rstrip("/"),
        }
        self._http = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._http.close()

    def fetch_user(self, user_id: str) -> User:
        """Return the identity record for ``user_id``; 404 upstream means unknown user."""
        data = self._request(IDENTITY, "GET", f"/users/{quote(user_id, safe='')}")
        return self._parse(IDENTITY, User, data.get("user", data))

    def create_user(self, name: str, email: str) -> User:
        data = self._request(IDENTITY, "POST", "/users", json={"name": name, "email": email})
        return self._parse(IDENTITY, User, data.get("user", data))

    def assign_product(self, product_id: str, account_id: str) -> Assignment:
        """Ask the catalog to attach ``product_id`` to ``account_id``."""
        data = self._request(
            CATALOG,
            "POST",
            f"/products/{quote(product_id, safe='')}/assign",
            json={"accountId": account_id},
        )
        return self._parse(CATALOG, Assignment, data.get("assignment", data))

    def _request(self, service: str, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self._base_urls[service]}{path}"
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            DOWNSTREAM_REQUESTS.labels(service=service, outcome="unreachable").inc()
            logger.warning("%s %s failed: %s", method, url, exc)
            raise UpstreamUnreachable(service, str(exc)) from exc

        data = self._decode(response)
        if response.is_success:
            if data is None:
                DOWNSTREAM_REQUESTS.labels(service=service, outcome="invalid").inc()
                raise UpstreamError(service, 502, f"{service} service returned invalid JSON")
            DOWNSTREAM_REQUESTS.labels(service=service, outcome="ok").inc()
            return data

        DOWNSTREAM_REQUESTS.labels(service=service, outcome="error").inc()
        message = (data or {}).get("error") or response.reason_phrase or "upstream error"
        logger.warning("%s %s returned %s: %s", method, url, response.status_code, message)
        raise UpstreamError(service, response.status_code, str(message))

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any] | None:
        """Parse the body as a JSON object; an empty body counts as ``{}``."""
        if not response.content.strip():
            return {}
        try:
            data = response.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    @staticmethod
    def _parse(service: str, model: type, payload: Any):
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamError(service, 502, f"{service} service returned an unexpected payload") from exc
