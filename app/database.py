from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from app.config import Settings, get_settings
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class MongoDatabase:
    """MongoDB client wrapper with an explicit connect/disconnect lifecycle"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Create the client and select the database"""
        if self.client is not None:
            return
        self.client = AsyncIOMotorClient(
            self.settings.mongodb_uri,
            serverSelectionTimeoutMS=self.settings.mongodb_server_selection_timeout_ms,
        )
        # The URI may name its own database; fall back to the configured one
        self.database = self.client.get_default_database(default=self.settings.mongodb_database)
        logger.info(f"MongoDB client created for database '{self.database.name}'")

    async def disconnect(self) -> None:
        """Close the client and drop every handle"""
        if self.client is None:
            return
        self.client.close()
        self.client = None
        self.database = None
        logger.info("MongoDB connection closed")

    async def test_connection(self) -> bool:
        """Test database connection"""
        try:
            await self.client.admin.command("ping")
            logger.info("MongoDB connection successful")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB connection failed: {e}")
            return False

    def get_collection(self, name: str) -> AsyncIOMotorCollection:
        """Get a collection handle; the client must be connected"""
        if self.database is None:
            raise RuntimeError("Database is not connected. Call connect() first.")
        return self.database[name]


# Global database instance
db = MongoDatabase()


async def init_db():
    """Initialize database connection"""
    logger.info("Initializing database connection...")
    await db.connect()
    success = await db.test_connection()
    if success:
        logger.info("Database initialized successfully")
    else:
        logger.error("Database initialization failed")
    return success


async def close_db():
    """Release the database connection"""
    await db.disconnect()


def get_database() -> MongoDatabase:
    """Dependency to get the connected database"""
    return db
