"""Identity service contracts consumed by other services."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """User record owned by the identity service.

    Unknown fields are kept so callers can relay the upstream payload as-is.
    """

    id: str
    name: str | None = None
    email: str | None = None

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)
