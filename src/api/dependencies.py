from fastapi import Depends, HTTPException

from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.transaction_repository import MongoTransactionRepository
from adapter.mongodb.user_repository import MongoUserRepository
from api.security import JWT_EXPIRES_IN, JWT_SECRET_KEY
from port.transaction_repository import TransactionRepository
from port.user_repository import UserRepository
from services.auth_service import AuthenticateUserUseCase
from services.transaction_service import (
    CreateTransactionUseCase,
    GetBalanceUseCase,
    GetTransactionsUseCase,
)
from services.user_service import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetAllUsersUseCase,
    GetUserByIdUseCase,
    UpdateUserUseCase,
)


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


# ── repositories ─────────────────────────────────────────

def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_transaction_repo() -> TransactionRepository:
    return MongoTransactionRepository(_get_db())


# ── users service use-cases ──────────────────────────────

def get_create_user_use_case(repo: UserRepository = Depends(get_user_repo)) -> CreateUserUseCase:
    return CreateUserUseCase(repo)


def get_authenticate_user_use_case(
    repo: UserRepository = Depends(get_user_repo),
) -> AuthenticateUserUseCase:
    return AuthenticateUserUseCase(repo, JWT_SECRET_KEY, JWT_EXPIRES_IN)


def get_user_by_id_use_case(repo: UserRepository = Depends(get_user_repo)) -> GetUserByIdUseCase:
    return GetUserByIdUseCase(repo)


def get_all_users_use_case(repo: UserRepository = Depends(get_user_repo)) -> GetAllUsersUseCase:
    return GetAllUsersUseCase(repo)


def get_update_user_use_case(repo: UserRepository = Depends(get_user_repo)) -> UpdateUserUseCase:
    return UpdateUserUseCase(repo)


def get_delete_user_use_case(repo: UserRepository = Depends(get_user_repo)) -> DeleteUserUseCase:
    return DeleteUserUseCase(repo)


# ── wallet service use-cases ─────────────────────────────

def get_create_transaction_use_case(
    repo: TransactionRepository = Depends(get_transaction_repo),
) -> CreateTransactionUseCase:
    return CreateTransactionUseCase(repo)


def get_transactions_use_case(
    repo: TransactionRepository = Depends(get_transaction_repo),
) -> GetTransactionsUseCase:
    return GetTransactionsUseCase(repo)


def get_balance_use_case(
    repo: TransactionRepository = Depends(get_transaction_repo),
) -> GetBalanceUseCase:
    return GetBalanceUseCase(repo)
