"""Unit tests for the MongoDB repositories using mocked collections."""

import unittest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.transaction_repository import MongoTransactionRepository
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import DuplicateError
from domain.model.transaction import Transaction, TransactionType
from domain.model.user import User

CREATED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


class _Cursor:
    """Minimal async cursor yielding the given documents."""

    def __init__(self, docs):
        self.docs = docs

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self.docs:
            yield doc


def _mock_db(collection: MagicMock) -> MagicMock:
    db = MagicMock()
    db.__getitem__.return_value = collection
    return db


def _user_doc(**overrides) -> dict:
    doc = {
        '_id': 'user-123',
        'first_name': 'John',
        'last_name': 'Doe',
        'email': 'john@example.com',
        'password': 'hashed-password',
        'created_at': CREATED_AT,
        'updated_at': CREATED_AT,
    }
    doc.update(overrides)
    return doc


class TestMongoUserRepository(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.repo = MongoUserRepository(_mock_db(self.collection))

    async def test_save_inserts_document(self):
        self.collection.insert_one = AsyncMock()
        user = User.create(first_name='John', last_name='Doe', email='john@example.com', password='hashed')

        await self.repo.save(user)

        doc = self.collection.insert_one.call_args[0][0]
        self.assertEqual(doc['_id'], user.id)
        self.assertEqual(doc['email'], 'john@example.com')
        self.assertEqual(doc['password'], 'hashed')

    async def test_save_maps_duplicate_key_to_duplicate_error(self):
        self.collection.insert_one = AsyncMock(side_effect=DuplicateKeyError('E11000 duplicate key error', code=11000))
        user = User.create(first_name='John', last_name='Doe', email='john@example.com', password='hashed')

        with self.assertRaises(DuplicateError) as ctx:
            await self.repo.save(user)

        self.assertEqual(ctx.exception.message, 'User with this email already exists')

    async def test_find_by_id(self):
        self.collection.find_one = AsyncMock(return_value=_user_doc())

        user = await self.repo.find_by_id('user-123')

        self.collection.find_one.assert_awaited_once_with({'_id': 'user-123'})
        self.assertEqual(user.id, 'user-123')
        self.assertEqual(user.created_at, CREATED_AT)

    async def test_find_by_email_missing(self):
        self.collection.find_one = AsyncMock(return_value=None)

        self.assertIsNone(await self.repo.find_by_email('nobody@example.com'))
        self.collection.find_one.assert_awaited_once_with({'email': 'nobody@example.com'})

    async def test_find_all_sorts_by_creation(self):
        self.collection.find.return_value.sort.return_value = _Cursor([
            _user_doc(),
            _user_doc(_id='user-456', email='jane@example.com'),
        ])

        users = await self.repo.find_all()

        self.collection.find.return_value.sort.assert_called_once_with('created_at', 1)
        self.assertEqual([u.id for u in users], ['user-123', 'user-456'])

    async def test_update_sets_fields(self):
        self.collection.update_one = AsyncMock()
        user = User.restore(**{k: v for k, v in _user_doc().items() if k != '_id'}, id='user-123')
        user.update_profile(first_name='Jonathan')

        updated = await self.repo.update(user)

        query, update = self.collection.update_one.call_args[0]
        self.assertEqual(query, {'_id': 'user-123'})
        self.assertEqual(update['$set']['first_name'], 'Jonathan')
        self.assertEqual(update['$set']['updated_at'], updated.updated_at)

    async def test_delete(self):
        self.collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
        self.assertTrue(await self.repo.delete('user-123'))

        self.collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=0))
        self.assertFalse(await self.repo.delete('user-123'))

    async def test_errors_propagate(self):
        self.collection.find_one = AsyncMock(side_effect=PyMongoError('connection lost'))

        with self.assertRaises(PyMongoError):
            await self.repo.find_by_id('user-123')


class TestMongoTransactionRepository(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.repo = MongoTransactionRepository(_mock_db(self.collection))

    async def test_save_stores_type_value(self):
        self.collection.insert_one = AsyncMock()
        tx = Transaction.create(user_id='user-123', amount=50, type=TransactionType.DEBIT)

        await self.repo.save(tx)

        doc = self.collection.insert_one.call_args[0][0]
        self.assertEqual(doc, {
            '_id': tx.id,
            'user_id': 'user-123',
            'amount': 50,
            'type': 'DEBIT',
            'created_at': tx.created_at,
        })

    async def test_find_by_user_id_with_type(self):
        self.collection.find.return_value.sort.return_value = _Cursor([{
            '_id': 'tx-1', 'user_id': 'user-123', 'amount': 50,
            'type': 'DEBIT', 'created_at': CREATED_AT,
        }])

        result = await self.repo.find_by_user_id('user-123', type=TransactionType.DEBIT)

        self.collection.find.assert_called_once_with({'user_id': 'user-123', 'type': 'DEBIT'})
        self.assertEqual(result[0].type, TransactionType.DEBIT)

    async def test_find_by_user_id_without_type(self):
        self.collection.find.return_value.sort.return_value = _Cursor([])

        self.assertEqual(await self.repo.find_by_user_id('user-123'), [])
        self.collection.find.assert_called_once_with({'user_id': 'user-123'})

    async def test_get_balance_from_aggregation(self):
        self.collection.aggregate = AsyncMock(return_value=_Cursor([
            {'_id': 'CREDIT', 'total': 25000},
            {'_id': 'DEBIT', 'total': 10000},
        ]))

        balance = await self.repo.get_balance('user-123')

        self.assertEqual(balance.amount, 15000)
        pipeline = self.collection.aggregate.call_args[0][0]
        self.assertEqual(pipeline[0], {'$match': {'user_id': 'user-123'}})

    async def test_get_balance_without_transactions(self):
        self.collection.aggregate = AsyncMock(return_value=_Cursor([]))

        self.assertEqual((await self.repo.get_balance('user-123')).amount, 0)


if __name__ == '__main__':
    unittest.main()
