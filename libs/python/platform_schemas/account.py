"""Account DTOs exposed by the accounts service."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AccountView(BaseModel):
    id: str
    user_id: str
    type: str
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
