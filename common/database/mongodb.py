"""
MongoDB connection manager and document store.

Provides async MongoDB connectivity through Motor and a DocumentStore that
keeps one document per identifier in a collection.

Example:
    from common.database import MongoDB, MongoDocumentStore

    db = MongoDB()
    await db.connect(uri="mongodb://localhost:27017", database_name="smartsplit")

    store = MongoDocumentStore(db.get_collection("users"))
    await store.set(uid, {"uid": uid, "email": "user@example.com"})
"""

import logging
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from common.database.base_store import DocumentStore

logger = logging.getLogger(__name__)


class MongoDB:
    """Generic MongoDB connection manager - works with any database."""

    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._database_name: Optional[str] = None

    async def connect(self, uri: str, database_name: str) -> None:
        """
        Connect to MongoDB and verify the server answers.

        Args:
            uri: MongoDB connection string
            database_name: Name of the database to use
        """
        # Mask the URI for logging (hide credentials)
        masked_uri = uri.split("@")[-1] if "@" in uri else uri
        logger.info(f"Connecting to MongoDB: {masked_uri}")

        try:
            self._client = AsyncIOMotorClient(uri)
            self._database_name = database_name
            await self._client.admin.command("ping")
            logger.info(f"Successfully connected to MongoDB database: {database_name}")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            if self._client:
                self._client.close()
            self._client = None
            self._database_name = None
            raise

    async def disconnect(self) -> None:
        """Close the MongoDB connection."""
        if self._client:
            logger.info(f"Disconnecting from MongoDB database: {self._database_name}")
            self._client.close()
            self._client = None
            self._database_name = None

    @property
    def is_connected(self) -> bool:
        """Check if a client is open."""
        return self._client is not None

    def get_collection(self, name: str):
        """
        Get a raw Motor collection.

        Args:
            name: Collection name

        Returns:
            AsyncIOMotorCollection instance
        """
        if not self._client or not self._database_name:
            logger.error("Attempted to get collection without database connection")
            raise RuntimeError("Database not connected")
        return self._client[self._database_name][name]


class MongoDocumentStore(DocumentStore):
    """Stores each document with ``_id`` set to its identifier."""

    def __init__(self, collection):
        """
        Args:
            collection: AsyncIOMotorCollection holding the documents
        """
        self._collection = collection

    async def get(self, identifier: str) -> Optional[Dict[str, Any]]:
        document = await self._collection.find_one({"_id": identifier})
        if document is None:
            return None
        document.pop("_id", None)
        return document

    async def set(self, identifier: str, document: Dict[str, Any]) -> None:
        await self._collection.replace_one(
            {"_id": identifier},
            {**document, "_id": identifier},
            upsert=True,
        )
        logger.debug(f"Stored document {identifier}")
