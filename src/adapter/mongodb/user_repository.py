"""MongoDB implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: AsyncDatabase):
        self.collection = db[USERS_COLLECTION_NAME]

    async def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            await create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            await create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User.restore(
            id=doc['_id'],
            first_name=doc['first_name'],
            last_name=doc['last_name'],
            email=doc['email'],
            password=doc['password'],
            created_at=doc['created_at'],
            updated_at=doc.get('updated_at'),
        )

    def _to_document(self, user: User) -> dict:
        return {
            '_id': user.id,
            'first_name': user.first_name,
            'last_name': user.last_name,
            'email': user.email,
            'password': user.password,
            'created_at': user.created_at,
            'updated_at': user.updated_at,
        }

    async def save(self, user: User) -> User:
        """Insert a new user. The unique email index turns a lost registration race into DuplicateError."""
        try:
            await self.collection.insert_one(self._to_document(user))
        except DuplicateKeyError:
            logger.info("Duplicate email rejected by index", extra={"userId": user.id})
            raise DuplicateError("User with this email already exists") from None
        except PyMongoError as e:
            logger.error("Failed to save user", extra={"userId": user.id, "error": str(e)})
            raise
        logger.info("User saved", extra={"userId": user.id})
        return user

    async def find_by_id(self, user_id: str) -> User | None:
        try:
            doc = await self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    async def find_by_email(self, email: str) -> User | None:
        try:
            doc = await self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    async def find_all(self) -> list[User]:
        try:
            cursor = self.collection.find({}).sort('created_at', 1)
            return [self._to_domain(doc) async for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise

    async def update(self, user: User) -> User:
        """Write name/password changes and stamp updated_at."""
        now = datetime.now(timezone.utc)
        try:
            await self.collection.update_one(
                {'_id': user.id},
                {'$set': {
                    'first_name': user.first_name,
                    'last_name': user.last_name,
                    'password': user.password,
                    'updated_at': now,
                }},
            )
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user.id, "error": str(e)})
            raise
        user.updated_at = now
        return user

    async def delete(self, user_id: str) -> bool:
        try:
            result = await self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise
        return result.deleted_count > 0
