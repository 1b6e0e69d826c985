"""
Authentication module - Pluggable identity providers (Firebase).
"""

from common.auth.base import (
    AuthStateSubscription,
    IdentityProvider,
    IdentityProviderError,
    Session,
)
from common.auth.firebase_auth import FirebaseIdentityProvider, initialize_firebase_app

__all__ = [
    "AuthStateSubscription",
    "IdentityProvider",
    "IdentityProviderError",
    "Session",
    "FirebaseIdentityProvider",
    "initialize_firebase_app",
]
