"""
Database module - Document stores for profile data.

Usage:
    from common.database import MongoDB, MongoDocumentStore

    db = MongoDB()
    await db.connect(uri, database_name)
    store = MongoDocumentStore(db.get_collection("users"))
"""

from common.database.base_store import DocumentStore
from common.database.firestore import FirestoreDocumentStore
from common.database.mongodb import MongoDB, MongoDocumentStore

__all__ = [
    "DocumentStore",
    "FirestoreDocumentStore",
    "MongoDB",
    "MongoDocumentStore",
]
