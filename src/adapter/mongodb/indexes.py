"""Index setup for the users and transactions collections.

Run once at application startup. An existing index that clashes with the
wanted one (same name with other keys, or same keys under another name) is
dropped and rebuilt.
"""

from logging import getLogger

from pymongo.errors import OperationFailure

logger = getLogger(__name__)

# Server error codes for IndexOptionsConflict / IndexKeySpecsConflict
INDEX_CONFLICT_CODES = {85, 86}


async def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create ``name`` on ``keys``, replacing a conflicting index if needed.

    Returns False when a conflict was reported but no clashing index could
    be found to replace. Other server errors propagate.
    """
    try:
        await collection.create_index(keys, name=name, **kwargs)
        return True
    except OperationFailure as e:
        if e.code not in INDEX_CONFLICT_CODES:
            raise
        logger.warning("Index conflict", extra={"index": name, "error": str(e)[:200]})
        return await _replace_conflicting(collection, keys, name, **kwargs)


async def _replace_conflicting(collection, keys: list, name: str, **kwargs) -> bool:
    wanted = dict(keys)
    existing = await collection.index_information()

    for existing_name, info in existing.items():
        if existing_name == '_id_':
            continue
        # exactly one of name/keys matches
        if (existing_name == name) != (dict(info.get('key', [])) == wanted):
            await collection.drop_index(existing_name)
            await collection.create_index(keys, name=name, **kwargs)
            logger.info("Index rebuilt", extra={"index": name, "replaced": existing_name})
            return True

    logger.error("Could not resolve index conflict", extra={"index": name})
    return False


async def ensure_all_indexes(db) -> bool:
    """Ensure indexes for every collection the services use."""
    from adapter.mongodb.transaction_repository import MongoTransactionRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    users_ok = await MongoUserRepository(db).ensure_indexes()
    transactions_ok = await MongoTransactionRepository(db).ensure_indexes()
    return users_ok and transactions_ok
