"""
MongoDB connection handle for a single cleanup run
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from admin_cleanup.core.config import Config
from admin_cleanup.core.errors import StoreOperationFailure
from admin_cleanup.core.logger import logger


class MongoConnection:
    """
    Owns one Motor client for the lifetime of a run.

    The handle is created by the caller and passed to whoever needs it;
    close() releases the client once and is a no-op afterwards.
    """

    def __init__(self, uri: str, database_name: str, server_selection_timeout_ms: int = 10000):
        self.uri = uri
        self.database_name = database_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None
        self._closed = False

    @classmethod
    def from_config(cls, config: Config) -> "MongoConnection":
        return cls(config.mongodb_url, config.mongodb_database)

    async def connect(self) -> AsyncIOMotorDatabase:
        """Create the client and ping the server"""
        logger.info(
            f"Connecting to MongoDB database '{self.database_name}'...",
            metadata={"event": "mongodb_connect_attempt", "database": self.database_name}
        )

        try:
            self.client = AsyncIOMotorClient(
                self.uri,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            )
            self.database = self.client[self.database_name]

            # Test connection
            await self.database.command('ping')
        except PyMongoError as e:
            logger.error(
                f"Could not connect to MongoDB: {e}",
                error=e,
                metadata={"event": "mongodb_connection_error", "database": self.database_name}
            )
            raise StoreOperationFailure("connect", cause=e) from e

        logger.info(
            f"Successfully connected to MongoDB database '{self.database_name}'",
            metadata={"event": "mongodb_connected", "database": self.database_name}
        )
        return self.database

    def collection(self, name: str) -> AsyncIOMotorCollection:
        if self.database is None:
            raise StoreOperationFailure("collection", collection=name,
                                        cause=RuntimeError("not connected"))
        return self.database[name]

    async def close(self):
        """Close the client; safe to call more than once"""
        if self._closed:
            return
        self._closed = True

        if self.client is not None:
            logger.info("Closing connection to MongoDB...", metadata={"event": "mongodb_close"})
            self.client.close()
        self.client = None
        self.database = None
