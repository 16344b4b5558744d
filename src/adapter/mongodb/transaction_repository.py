"""MongoDB implementation of TransactionRepository."""

from logging import getLogger
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError
from adapter.mongodb import TRANSACTIONS_COLLECTION_NAME
from domain.model.transaction import Balance, Transaction, TransactionType

logger = getLogger(__name__)


class MongoTransactionRepository:
    def __init__(self, db: AsyncDatabase):
        self.collection = db[TRANSACTIONS_COLLECTION_NAME]

    async def ensure_indexes(self) -> bool:
        """Create indexes for transactions collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            await create_index_safe(
                self.collection,
                [('user_id', 1), ('created_at', 1)],
                'idx_transactions_user_created',
            )
            await create_index_safe(
                self.collection,
                [('user_id', 1), ('type', 1)],
                'idx_transactions_user_type',
            )
            return True
        except PyMongoError as e:
            logger.error("Failed to create transactions indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Transaction:
        return Transaction.restore(
            id=doc['_id'],
            user_id=doc['user_id'],
            amount=doc['amount'],
            type=doc['type'],
            created_at=doc['created_at'],
        )

    async def save(self, transaction: Transaction) -> Transaction:
        doc = {
            '_id': transaction.id,
            'user_id': transaction.user_id,
            'amount': transaction.amount,
            'type': transaction.type.value,
            'created_at': transaction.created_at,
        }
        try:
            await self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to save transaction", extra={
                "transactionId": transaction.id,
                "userId": transaction.user_id,
                "error": str(e),
            })
            raise
        return transaction

    async def find_by_user_id(
        self,
        user_id: str,
        type: TransactionType | None = None,
    ) -> list[Transaction]:
        query: dict = {'user_id': user_id}
        if type is not None:
            query['type'] = TransactionType(type).value
        try:
            cursor = self.collection.find(query).sort('created_at', 1)
            return [self._to_domain(doc) async for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list transactions", extra={"userId": user_id, "error": str(e)})
            raise

    async def get_balance(self, user_id: str) -> Balance:
        """Aggregate CREDIT and DEBIT totals in the database."""
        pipeline = [
            {'$match': {'user_id': user_id}},
            {'$group': {'_id': '$type', 'total': {'$sum': '$amount'}}},
        ]
        try:
            cursor = await self.collection.aggregate(pipeline)
            totals = {doc['_id']: doc['total'] async for doc in cursor}
        except PyMongoError as e:
            logger.error("Failed to compute balance", extra={"userId": user_id, "error": str(e)})
            raise
        amount = totals.get(TransactionType.CREDIT.value, 0) - totals.get(TransactionType.DEBIT.value, 0)
        return Balance(amount=amount)
