"""MongoDB connection management (Motor)."""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


def create_mongo_client(uri: str) -> AsyncIOMotorClient:
    """Create a Motor client. No I/O happens until the first operation."""
    return AsyncIOMotorClient(uri)


def get_database(client: AsyncIOMotorClient, name: str) -> AsyncIOMotorDatabase:
    return client[name]


async def ping(db: AsyncIOMotorDatabase) -> bool:
    """Return True when the database answers a ping."""
    try:
        await db.command("ping")
        return True
    except Exception as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False
