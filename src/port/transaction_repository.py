from typing import Protocol

from domain.model.transaction import Balance, Transaction, TransactionType


class TransactionRepository(Protocol):
    """Protocol defining the interface for wallet transaction data access."""

    async def save(self, transaction: Transaction) -> Transaction:
        """Persist a transaction. Return the stored Transaction."""
        ...

    async def find_by_user_id(
        self,
        user_id: str,
        type: TransactionType | None = None,
    ) -> list[Transaction]:
        """List a user's transactions, optionally filtered by type. None means all types."""
        ...

    async def get_balance(self, user_id: str) -> Balance:
        """Sum of CREDIT amounts minus sum of DEBIT amounts for a user."""
        ...
