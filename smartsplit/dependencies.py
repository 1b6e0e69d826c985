"""
Wiring for the identity gateway.

Builds the provider and profile store from settings and hands them to
IdentityGateway explicitly. identity_gateway() is the application
bootstrap: it initializes Firebase, opens connections and releases them
on exit.

Example:
    from smartsplit.dependencies import identity_gateway

    async with identity_gateway() as gateway:
        profile = await gateway.sign_in(email, password)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from common.auth import FirebaseIdentityProvider, IdentityProvider, initialize_firebase_app
from common.database import DocumentStore, FirestoreDocumentStore, MongoDB, MongoDocumentStore
from common.utils import configure_logging
from smartsplit.config import Settings, settings as default_settings
from smartsplit.gateway import IdentityGateway

logger = logging.getLogger(__name__)


def create_identity_provider(
    settings: Settings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FirebaseIdentityProvider:
    """Firebase provider configured from settings."""
    return FirebaseIdentityProvider(
        api_key=settings.FIREBASE_API_KEY,
        http_client=http_client,
        continue_uri=settings.FIREBASE_CONTINUE_URI,
    )


def create_profile_store(settings: Settings, mongodb: Optional[MongoDB] = None) -> DocumentStore:
    """
    Profile store selected by settings.PROFILE_STORE.

    Args:
        settings: Application settings
        mongodb: Connected MongoDB instance (required for "mongodb")

    Raises:
        ValueError: Unknown store or missing MongoDB connection
    """
    if settings.PROFILE_STORE == "mongodb":
        if mongodb is None:
            raise ValueError("A connected MongoDB instance is required for the MongoDB profile store")
        return MongoDocumentStore(mongodb.get_collection(settings.PROFILE_COLLECTION))

    if settings.PROFILE_STORE == "firestore":
        return FirestoreDocumentStore.from_app(collection=settings.PROFILE_COLLECTION)

    raise ValueError(f"Unknown profile store: {settings.PROFILE_STORE}")


def create_identity_gateway(
    provider: IdentityProvider,
    store: DocumentStore,
    gateway_logger: Optional[logging.Logger] = None,
) -> IdentityGateway:
    """Gateway over explicit provider and store instances."""
    return IdentityGateway(provider, store, logger=gateway_logger)


@asynccontextmanager
async def identity_gateway(settings: Optional[Settings] = None) -> AsyncIterator[IdentityGateway]:
    """
    Application bootstrap for the identity gateway.

    Validates settings, configures logging, initializes the Firebase app
    (Firestore store) or connects MongoDB, and yields a ready gateway.
    On exit, open auth-state subscriptions, the HTTP client and the
    database connection are closed.

    Raises:
        ValueError: If required settings are missing
    """
    if settings is None:
        settings = default_settings
    settings.validate_required()
    configure_logging(settings.get_log_level())

    mongodb: Optional[MongoDB] = None
    if settings.PROFILE_STORE == "firestore":
        initialize_firebase_app(
            credentials_path=settings.FIREBASE_CREDENTIALS_PATH,
            project_id=settings.FIREBASE_PROJECT_ID,
        )
    else:
        mongodb = MongoDB()
        await mongodb.connect(uri=settings.MONGODB_URI, database_name=settings.MONGODB_DATABASE)

    provider = create_identity_provider(settings)
    try:
        store = create_profile_store(settings, mongodb)
        logger.info(f"{settings.APP_NAME} identity gateway ready ({settings.PROFILE_STORE} profiles)")
        yield create_identity_gateway(provider, store)
    finally:
        await provider.aclose()
        if mongodb is not None:
            await mongodb.disconnect()
        logger.info("Identity gateway shut down")
