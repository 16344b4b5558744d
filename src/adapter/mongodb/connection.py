import os
import logging
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo driver logs
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'wallet')

_client_cache: AsyncMongoClient | None = None
_connection_failed = False


def reset_client():
    global _client_cache, _connection_failed
    _client_cache = None
    _connection_failed = False


def get_mongodb_client() -> AsyncMongoClient | None:
    """Get the cached async MongoDB client, creating it on first use.

    The client connects lazily: no I/O happens here, the first operation
    (or ``ping_mongodb``) opens the pool.

    Returns:
        AsyncMongoClient or None if MONGO_URL is not configured
    """
    global _client_cache, _connection_failed

    if _client_cache is not None:
        return _client_cache

    # Don't retry if configuration is missing
    if _connection_failed:
        return None

    if not MONGO_URL:
        logger.error("[MONGODB] MONGO_URL not configured.")
        _connection_failed = True
        return None

    _client_cache = AsyncMongoClient(
        MONGO_URL,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=5000,
        socketTimeoutMS=30000,
        maxPoolSize=10,
        minPoolSize=0,
        maxIdleTimeMS=30000,
        waitQueueTimeoutMS=10000,
        retryWrites=True,
        retryReads=True,
        compressors=['zlib'],
        zlibCompressionLevel=1,
        tz_aware=True,
    )
    logger.info(f"[MONGODB] Client configured for database {DATABASE_NAME}")
    return _client_cache


async def ping_mongodb() -> bool:
    """Return True if the server answers a ping."""
    client = get_mongodb_client()
    if client is None:
        return False
    try:
        await client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False


async def close_client() -> None:
    global _client_cache
    if _client_cache is not None:
        await _client_cache.close()
        _client_cache = None
