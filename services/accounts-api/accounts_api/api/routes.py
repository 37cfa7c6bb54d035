"""HTTP route definitions for the accounts service."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status
from pydantic import BaseModel, ConfigDict, Field

from platform_schemas import AccountView, Assignment, User

from ..domain.account import Account
from ..domain.contracts import DEFAULT_ACCOUNT_TYPE, CreateAccountInput, OnboardingInput, coerce_amount
from ..domain.errors import InvalidRequest
from ..domain.onboarding import OnboardingOrchestrator
from ..domain.service import AccountService

router = APIRouter()

Balance = int | float


def _view(account: Account) -> AccountView:
    return AccountView(
        id=account.account_id,
        user_id=account.user_id,
        type=account.type,
        created_at=account.created_at,
    )


class CreateAccountRequest(BaseModel):
    """Payload accepted when opening an account for an existing user."""

    user_id: str | None = Field(default=None, alias="userId")
    type: str | None = None


class AccountEnvelope(BaseModel):
    account: AccountView


class AccountWithBalance(BaseModel):
    account: AccountView
    balance: Balance


class AccountList(BaseModel):
    accounts: list[AccountView]


class CreditRequest(BaseModel):
    # checked by hand so unknown accounts answer 404 before the amount is inspected
    amount: Any = None


class CreditResponse(BaseModel):
    account_id: str = Field(alias="accountId")
    balance: Balance

    model_config = ConfigDict(populate_by_name=True)


class OnboardRequest(BaseModel):
    """Payload for the compound onboarding call."""

    name: str | None = None
    email: str | None = None
    product_id: str | None = Field(default=None, alias="productId")
    initial_credit: Any = Field(default=None, alias="initialCredit")


class OnboardResponse(BaseModel):
    user: User
    account: AccountView
    assignment: Assignment
    balance: Balance


def get_service(request: Request) -> AccountService:
    """Resolve the `AccountService` stored on the FastAPI application state."""
    service: AccountService = request.app.state.account_service
    return service


def get_orchestrator(request: Request) -> OnboardingOrchestrator:
    orchestrator: OnboardingOrchestrator = request.app.state.onboarding
    return orchestrator


@router.post("/accounts", response_model=AccountEnvelope, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: CreateAccountRequest | None = Body(default=None),
    service: AccountService = Depends(get_service),
) -> AccountEnvelope:
    """Open an account for a user known to the identity service."""
    payload = payload or CreateAccountRequest()
    if not payload.user_id:
        raise InvalidRequest("userId is required")
    account_type = DEFAULT_ACCOUNT_TYPE if payload.type is None else payload.type
    account = service.create_account(CreateAccountInput(user_id=payload.user_id, type=account_type))
    return AccountEnvelope(account=_view(account))


@router.post(
    "/accounts/onboard",
    response_model=OnboardResponse,
    status_code=status.HTTP_201_CREATED,
)
def onboard(
    payload: OnboardRequest | None = Body(default=None),
    orchestrator: OnboardingOrchestrator = Depends(get_orchestrator),
) -> OnboardResponse:
    """Create a user, open and optionally fund an account, then assign a product.

    A non-numeric ``initialCredit`` is ignored rather than rejected.
    """
    payload = payload or OnboardRequest()
    if not (payload.name and payload.email and payload.product_id):
        raise InvalidRequest("name, email, and productId are required")
    result = orchestrator.onboard(
        OnboardingInput(
            name=payload.name,
            email=payload.email,
            product_id=payload.product_id,
            initial_credit=coerce_amount(payload.initial_credit),
        )
    )
    return OnboardResponse(
        user=result.user,
        account=_view(result.account),
        assignment=result.assignment,
        balance=result.balance,
    )


@router.get("/accounts", response_model=AccountList)
def list_accounts(
    user_id: str | None = Query(default=None, alias="userId"),
    service: AccountService = Depends(get_service),
) -> AccountList:
    """List a user's accounts in the order they were opened."""
    if not user_id:
        raise InvalidRequest("userId query is required")
    return AccountList(accounts=[_view(account) for account in service.list_accounts(user_id)])


@router.get("/accounts/{account_id}", response_model=AccountWithBalance)
def get_account(
    account_id: str,
    service: AccountService = Depends(get_service),
) -> AccountWithBalance:
    account, balance = service.get_account(account_id)
    return AccountWithBalance(account=_view(account), balance=balance)


@router.post("/accounts/{account_id}/credit", response_model=CreditResponse)
def credit_account(
    account_id: str,
    payload: CreditRequest | None = Body(default=None),
    service: AccountService = Depends(get_service),
) -> CreditResponse:
    """Apply a signed amount to the balance; overdrafts are allowed."""
    account, _ = service.get_account(account_id)
    amount = coerce_amount(payload.amount if payload else None)
    if amount is None:
        raise InvalidRequest("amount must be a number")
    balance = service.credit(account.account_id, amount)
    return CreditResponse(account_id=account.account_id, balance=balance)
