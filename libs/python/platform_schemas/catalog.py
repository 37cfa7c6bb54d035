"""Catalog service contracts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Assignment(BaseModel):
    id: str | None = None
    product_id: str | None = Field(default=None, alias="productId")
    account_id: str | None = Field(default=None, alias="accountId")

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)
