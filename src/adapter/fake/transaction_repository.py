"""In-memory implementation of TransactionRepository for testing."""

from domain.model.transaction import Balance, Transaction, TransactionType


class FakeTransactionRepository:
    def __init__(self):
        self.store: list[Transaction] = []

    # ── write operations ─────────────────────────────────────

    async def save(self, transaction: Transaction) -> Transaction:
        self.store.append(transaction)
        return transaction

    # ── read operations ──────────────────────────────────────

    async def find_by_user_id(
        self,
        user_id: str,
        type: TransactionType | None = None,
    ) -> list[Transaction]:
        return [
            tx for tx in self.store
            if tx.user_id == user_id and (type is None or tx.type == type)
        ]

    async def get_balance(self, user_id: str) -> Balance:
        amount = 0
        for tx in self.store:
            if tx.user_id != user_id:
                continue
            if tx.type == TransactionType.CREDIT:
                amount += tx.amount
            else:
                amount -= tx.amount
        return Balance(amount=amount)
