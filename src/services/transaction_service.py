"""Wallet use-cases: recording transactions and reading balances.

The DEBIT funds check lives in the route handler, not here: these
use-cases never read the balance before writing.
"""

import logging

from domain.model.transaction import Balance, Transaction, TransactionType
from port.transaction_repository import TransactionRepository


class CreateTransactionUseCase:
    def __init__(self, transaction_repo: TransactionRepository, logger: logging.Logger | None = None):
        self.transaction_repo = transaction_repo
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, user_id: str, amount: float, type: TransactionType | str) -> Transaction:
        """Validate and persist a transaction.

        Raises:
            ValidationError: empty user id, non-positive amount or unknown type
                (raised before the repository is touched)
        """
        transaction = Transaction.create(user_id=user_id, amount=amount, type=type)
        saved = await self.transaction_repo.save(transaction)

        self.logger.info("Transaction created", extra={
            "transactionId": saved.id,
            "userId": user_id,
            "type": saved.type.value,
            "amount": saved.amount,
        })
        return saved


class GetTransactionsUseCase:
    def __init__(self, transaction_repo: TransactionRepository):
        self.transaction_repo = transaction_repo

    async def execute(self, user_id: str, type: TransactionType | None = None) -> list[Transaction]:
        return await self.transaction_repo.find_by_user_id(user_id, type=type)


class GetBalanceUseCase:
    def __init__(self, transaction_repo: TransactionRepository):
        self.transaction_repo = transaction_repo

    async def execute(self, user_id: str) -> Balance:
        return await self.transaction_repo.get_balance(user_id)
