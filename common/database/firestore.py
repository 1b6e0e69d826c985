"""
Cloud Firestore document store.

Uses the async Firestore client exposed by the Firebase Admin SDK. The
Firebase app must be initialized first (see initialize_firebase_app).

Example:
    initialize_firebase_app(credentials_path="serviceAccount.json")
    store = FirestoreDocumentStore.from_app(collection="users")
    doc = await store.get(uid)
"""

import logging
from typing import Any, Dict, Optional

from firebase_admin import firestore_async

from common.database.base_store import DocumentStore

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """Stores each document at ``<collection>/<identifier>``."""

    def __init__(self, client, collection: str = "users"):
        """
        Args:
            client: google.cloud.firestore.AsyncClient
            collection: Collection holding the documents
        """
        self._client = client
        self._collection = collection

    @classmethod
    def from_app(cls, app=None, collection: str = "users") -> "FirestoreDocumentStore":
        """Build a store on the async client of a Firebase Admin app."""
        return cls(firestore_async.client(app), collection=collection)

    def _document(self, identifier: str):
        return self._client.collection(self._collection).document(identifier)

    async def get(self, identifier: str) -> Optional[Dict[str, Any]]:
        logger.debug(f"Fetching {self._collection}/{identifier}")
        snapshot = await self._document(identifier).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    async def set(self, identifier: str, document: Dict[str, Any]) -> None:
        logger.debug(f"Writing {self._collection}/{identifier}")
        await self._document(identifier).set(document)
