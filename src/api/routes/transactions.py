"""Wallet transaction routes.

- POST /transactions: Record a CREDIT or DEBIT
- GET /transactions: List the caller's transactions (optional ?type=)
- GET /transactions/balance: Current balance

The caller is identified by the ``sub`` claim of the bearer token.

DEBIT flow:
    read balance → reject if balance < amount → create transaction
The read and the write are separate repository calls with no lock between
them, so concurrent DEBITs for the same user can both pass the check.
"""

import json
import logging
import math
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from api.dependencies import (
    get_balance_use_case,
    get_create_transaction_use_case,
    get_transactions_use_case,
)
from api.errors import (
    domain_error_response,
    error_response,
    unexpected_error_response,
)
from api.security import get_token_claims
from domain.model.errors import InsufficientFundsError, ValidationError
from domain.model.transaction import TransactionType, is_positive_amount
from services.transaction_service import (
    CreateTransactionUseCase,
    GetBalanceUseCase,
    GetTransactionsUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])

REQUIRED_FIELDS = ["amount", "type"]
INVALID_TYPE_MESSAGE = "Invalid transaction type. Must be CREDIT or DEBIT"


def _invalid_user_token_response() -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, "User ID not found in token", "INVALID_USER_TOKEN")


def _echo(value):
    """Client value for an error body. Non-finite floats are sent as their JSON spelling."""
    if isinstance(value, float) and not math.isfinite(value):
        return json.dumps(value)
    return value


def _parse_type(value) -> TransactionType | None:
    try:
        return TransactionType(value)
    except ValueError:
        return None


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: Any = Body(default=None),
    claims: dict = Depends(get_token_claims),
    create_use_case: CreateTransactionUseCase = Depends(get_create_transaction_use_case),
    balance_use_case: GetBalanceUseCase = Depends(get_balance_use_case),
):
    """Record a transaction for the authenticated user.

    Input checks run in order: missing fields, amount, type. A DEBIT larger
    than the current balance is rejected before anything is written.
    """
    user_id = claims.get("sub")
    if not user_id:
        return _invalid_user_token_response()

    body = payload if isinstance(payload, dict) else {}
    missing = [field for field in REQUIRED_FIELDS if body.get(field) is None]
    if missing:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Missing required fields",
            missingFields=missing,
            requiredFields=REQUIRED_FIELDS,
        )

    amount = body["amount"]
    if not is_positive_amount(amount):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid amount - must be a positive number",
            provided=_echo(amount),
        )

    tx_type = _parse_type(body["type"])
    if tx_type is None:
        return error_response(status.HTTP_400_BAD_REQUEST, INVALID_TYPE_MESSAGE, provided=_echo(body["type"]))

    try:
        if tx_type == TransactionType.DEBIT:
            balance = await balance_use_case.execute(user_id=user_id)
            if balance.amount < amount:
                raise InsufficientFundsError(balance.amount, amount)

        transaction = await create_use_case.execute(user_id=user_id, amount=amount, type=tx_type)
    except InsufficientFundsError as e:
        logger.warning("Debit rejected: insufficient funds", extra={
            "userId": user_id,
            "currentBalance": e.current_balance,
            "requestedAmount": e.requested_amount,
        })
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            e.message,
            e.code,
            currentBalance=e.current_balance,
            requestedAmount=e.requested_amount,
        )
    except ValidationError as e:
        return domain_error_response(status.HTTP_400_BAD_REQUEST, e)
    except Exception as e:
        return unexpected_error_response(
            logger, e, "transaction creation",
            error="Internal server error during transaction creation",
            with_code=True,
            userId=user_id,
        )

    return JSONResponse(status_code=status.HTTP_201_CREATED, content=transaction.to_dict())


@router.get("")
async def get_transactions(
    type: Optional[str] = Query(default=None, description="CREDIT or DEBIT"),
    claims: dict = Depends(get_token_claims),
    use_case: GetTransactionsUseCase = Depends(get_transactions_use_case),
):
    user_id = claims.get("sub")
    if not user_id:
        return _invalid_user_token_response()

    tx_type = None
    if type is not None:
        tx_type = _parse_type(type)
        if tx_type is None:
            return error_response(status.HTTP_400_BAD_REQUEST, INVALID_TYPE_MESSAGE, provided=type)

    try:
        transactions = await use_case.execute(user_id=user_id, type=tx_type)
    except Exception as e:
        return unexpected_error_response(
            logger, e, "transaction listing",
            error="Internal server error while fetching transactions",
            with_code=True,
            userId=user_id,
        )

    return [tx.to_dict() for tx in transactions]


@router.get("/balance")
async def get_balance(
    claims: dict = Depends(get_token_claims),
    use_case: GetBalanceUseCase = Depends(get_balance_use_case),
):
    user_id = claims.get("sub")
    if not user_id:
        return _invalid_user_token_response()

    try:
        balance = await use_case.execute(user_id=user_id)
    except Exception as e:
        return unexpected_error_response(
            logger, e, "balance lookup",
            error="Internal server error while fetching balance",
            with_code=True,
            userId=user_id,
        )

    return balance.to_dict()
