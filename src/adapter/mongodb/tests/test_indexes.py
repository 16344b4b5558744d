"""Tests for index creation with conflict resolution."""

import unittest
from unittest.mock import AsyncMock, MagicMock

from pymongo.errors import OperationFailure

from adapter.mongodb.indexes import create_index_safe, ensure_all_indexes


class TestCreateIndexSafe(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.collection.create_index = AsyncMock()
        self.collection.drop_index = AsyncMock()

    async def test_creates_index(self):
        result = await create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)

        self.assertTrue(result)
        self.collection.create_index.assert_awaited_once_with([('email', 1)], name='idx_users_email', unique=True)

    async def test_recreates_index_with_changed_keys(self):
        self.collection.create_index.side_effect = [OperationFailure('Index already exists with different options', code=85), None]
        self.collection.index_information = AsyncMock(return_value={
            '_id_': {'key': [('_id', 1)]},
            'idx_users_email': {'key': [('email', -1)]},
        })

        result = await create_index_safe(self.collection, [('email', 1)], 'idx_users_email')

        self.assertTrue(result)
        self.collection.drop_index.assert_awaited_once_with('idx_users_email')
        self.assertEqual(self.collection.create_index.await_count, 2)

    async def test_unrelated_error_propagates(self):
        self.collection.create_index.side_effect = OperationFailure('not authorized', code=13)

        with self.assertRaises(OperationFailure):
            await create_index_safe(self.collection, [('email', 1)], 'idx_users_email')

    async def test_unresolved_conflict_returns_false(self):
        self.collection.create_index.side_effect = OperationFailure('IndexKeySpecsConflict', code=86)
        self.collection.index_information = AsyncMock(return_value={'_id_': {'key': [('_id', 1)]}})

        self.assertFalse(await create_index_safe(self.collection, [('email', 1)], 'idx_users_email'))


class TestEnsureAllIndexes(unittest.IsolatedAsyncioTestCase):

    async def test_creates_indexes_on_both_collections(self):
        collection = MagicMock()
        collection.create_index = AsyncMock()
        db = MagicMock()
        db.__getitem__.return_value = collection

        self.assertTrue(await ensure_all_indexes(db))
        db.__getitem__.assert_any_call('users')
        db.__getitem__.assert_any_call('transactions')
        self.assertEqual(collection.create_index.await_count, 4)


if __name__ == '__main__':
    unittest.main()
