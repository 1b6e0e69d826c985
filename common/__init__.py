"""
Common library for reusable infrastructure components.

- auth: Pluggable identity providers (Firebase)
- database: Document stores (Firestore, MongoDB)
- config: Base settings class
- utils: Logging setup
"""

import logging

from common.auth import (
    AuthStateSubscription,
    FirebaseIdentityProvider,
    IdentityProvider,
    IdentityProviderError,
    Session,
    initialize_firebase_app,
)
from common.database import (
    DocumentStore,
    FirestoreDocumentStore,
    MongoDB,
    MongoDocumentStore,
)
from common.config import BaseAppSettings
from common.utils import configure_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Auth
    "AuthStateSubscription",
    "FirebaseIdentityProvider",
    "IdentityProvider",
    "IdentityProviderError",
    "Session",
    "initialize_firebase_app",
    # Database
    "DocumentStore",
    "FirestoreDocumentStore",
    "MongoDB",
    "MongoDocumentStore",
    # Config
    "BaseAppSettings",
    # Utils
    "configure_logging",
]
