"""Domain-level request and result contracts shared by multiple layers."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import math
from typing import Union

from platform_schemas import Assignment, User

from .account import Account

DEFAULT_ACCOUNT_TYPE = "standard"

Amount = Union[int, float, Decimal]


def coerce_amount(value: object) -> Amount | None:
    """Return ``value`` when it is a finite number, otherwise ``None``.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    return None


@dataclass(slots=True)
class CreateAccountInput:
    """Validated inputs required to open an account for a user."""

    user_id: str
    type: str = DEFAULT_ACCOUNT_TYPE


@dataclass(slots=True)
class OnboardingInput:
    """Inputs for the compound create-user/open-account/assign-product call.

    ``initial_credit`` is already filtered through :func:`coerce_amount`;
    ``None`` means no credit is applied.
    """

    name: str
    email: str
    product_id: str
    initial_credit: Amount | None = None


@dataclass(slots=True)
class OnboardingResult:
    user: User
    account: Account
    assignment: Assignment
    balance: Amount
