"""Unit tests for the Firestore and MongoDB document stores."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from common.database.firestore import FirestoreDocumentStore
from common.database.mongodb import MongoDB, MongoDocumentStore


# ─────────────────────────────────────────────────────────────────
# Firestore
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def firestore_client():
    client = MagicMock()
    doc_ref = client.collection.return_value.document.return_value
    doc_ref.get = AsyncMock()
    doc_ref.set = AsyncMock()
    return client


class TestFirestoreDocumentStore:

    @pytest.mark.asyncio
    async def test_get_existing(self, firestore_client, sample_uid, sample_profile_doc):
        snapshot = MagicMock(exists=True)
        snapshot.to_dict.return_value = sample_profile_doc
        firestore_client.collection.return_value.document.return_value.get.return_value = snapshot
        store = FirestoreDocumentStore(firestore_client)

        assert await store.get(sample_uid) == sample_profile_doc
        firestore_client.collection.assert_called_with("users")
        firestore_client.collection.return_value.document.assert_called_with(sample_uid)

    @pytest.mark.asyncio
    async def test_get_missing(self, firestore_client, sample_uid):
        snapshot = MagicMock(exists=False)
        firestore_client.collection.return_value.document.return_value.get.return_value = snapshot
        store = FirestoreDocumentStore(firestore_client, collection="profiles")

        assert await store.get(sample_uid) is None
        firestore_client.collection.assert_called_with("profiles")
        snapshot.to_dict.assert_not_called()

    @pytest.mark.asyncio
    async def test_set_overwrites_document(self, firestore_client, sample_uid, sample_profile_doc):
        store = FirestoreDocumentStore(firestore_client)

        await store.set(sample_uid, sample_profile_doc)

        doc_ref = firestore_client.collection.return_value.document.return_value
        doc_ref.set.assert_awaited_once_with(sample_profile_doc)


# ─────────────────────────────────────────────────────────────────
# MongoDB
# ─────────────────────────────────────────────────────────────────


class TestMongoDocumentStore:

    @pytest.mark.asyncio
    async def test_get_strips_id(self, mock_collection, sample_uid, sample_profile_doc):
        mock_collection.find_one.return_value = {"_id": sample_uid, **sample_profile_doc}
        store = MongoDocumentStore(mock_collection)

        document = await store.get(sample_uid)

        mock_collection.find_one.assert_awaited_once_with({"_id": sample_uid})
        assert document == sample_profile_doc

    @pytest.mark.asyncio
    async def test_get_missing(self, mock_collection, sample_uid):
        mock_collection.find_one.return_value = None
        store = MongoDocumentStore(mock_collection)

        assert await store.get(sample_uid) is None

    @pytest.mark.asyncio
    async def test_set_upserts_by_identifier(self, mock_collection, sample_uid, sample_profile_doc):
        store = MongoDocumentStore(mock_collection)

        await store.set(sample_uid, sample_profile_doc)

        mock_collection.replace_one.assert_awaited_once_with(
            {"_id": sample_uid},
            {**sample_profile_doc, "_id": sample_uid},
            upsert=True,
        )

    @pytest.mark.asyncio
    async def test_errors_propagate(self, mock_collection, sample_uid):
        mock_collection.find_one.side_effect = RuntimeError("not primary")
        store = MongoDocumentStore(mock_collection)

        with pytest.raises(RuntimeError):
            await store.get(sample_uid)


class TestMongoDB:

    def test_collection_requires_connection(self):
        db = MongoDB()

        assert db.is_connected is False
        with pytest.raises(RuntimeError, match="Database not connected"):
            db.get_collection("users")

    @pytest.mark.asyncio
    async def test_disconnect_without_connection_is_noop(self):
        db = MongoDB()

        await db.disconnect()

        assert db.is_connected is False

    @pytest.mark.asyncio
    async def test_failed_ping_closes_client(self):
        client = MagicMock()
        client.admin.command = AsyncMock(side_effect=RuntimeError("server selection timeout"))
        db = MongoDB()

        with patch("common.database.mongodb.AsyncIOMotorClient", return_value=client):
            with pytest.raises(RuntimeError, match="server selection timeout"):
                await db.connect("mongodb://user:pw@db.example.com:27017", "smartsplit")

        client.close.assert_called_once()
        assert db.is_connected is False
        with pytest.raises(RuntimeError, match="Database not connected"):
            db.get_collection("users")
