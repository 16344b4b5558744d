"""Tests for FakeTransactionRepository."""

import unittest

from adapter.fake.transaction_repository import FakeTransactionRepository
from domain.model.transaction import Transaction, TransactionType


class TestFakeTransactionRepository(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.repo = FakeTransactionRepository()

    async def _add(self, user_id: str, amount: float, type: TransactionType) -> Transaction:
        return await self.repo.save(Transaction.create(user_id=user_id, amount=amount, type=type))

    async def test_balance_of_empty_wallet_is_zero(self):
        balance = await self.repo.get_balance('user-1')

        self.assertEqual(balance.amount, 0)

    async def test_balance_is_credits_minus_debits(self):
        await self._add('user-1', 100, TransactionType.CREDIT)
        await self._add('user-1', 50, TransactionType.CREDIT)
        await self._add('user-1', 30, TransactionType.DEBIT)
        await self._add('user-2', 999, TransactionType.CREDIT)

        balance = await self.repo.get_balance('user-1')

        self.assertEqual(balance.amount, 120)

    async def test_find_by_user_id_keeps_insertion_order(self):
        first = await self._add('user-1', 10, TransactionType.CREDIT)
        second = await self._add('user-1', 5, TransactionType.DEBIT)
        await self._add('user-2', 7, TransactionType.CREDIT)

        result = await self.repo.find_by_user_id('user-1')

        self.assertEqual([tx.id for tx in result], [first.id, second.id])

    async def test_find_by_user_id_filters_by_type(self):
        await self._add('user-1', 10, TransactionType.CREDIT)
        debit = await self._add('user-1', 5, TransactionType.DEBIT)

        result = await self.repo.find_by_user_id('user-1', type=TransactionType.DEBIT)

        self.assertEqual([tx.id for tx in result], [debit.id])

    async def test_find_by_user_id_unknown_user(self):
        self.assertEqual(await self.repo.find_by_user_id('ghost'), [])


if __name__ == '__main__':
    unittest.main()
