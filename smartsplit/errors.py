"""
Gateway error type and provider code translation tables.
"""

from typing import Dict

from common.auth.base import IdentityProviderError


class GatewayError(Exception):
    """Failure surfaced to the app; carries only a displayable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


SIGN_IN_ERRORS: Dict[str, str] = {
    "user-not-found": "No user found with this email",
    "wrong-password": "Invalid password",
    "invalid-email": "Invalid email format",
    "user-disabled": "This account has been disabled",
    "too-many-requests": "Too many attempts. Please try again later",
}

RESET_PASSWORD_ERRORS: Dict[str, str] = {
    "user-not-found": "No user found with this email",
    "invalid-email": "Invalid email format",
}

REGISTRATION_ERRORS: Dict[str, str] = {
    "email-already-in-use": "Email already in use",
    "invalid-email": "Invalid email format",
    "weak-password": "Password is too weak",
    "operation-not-allowed": "Email/password accounts are not enabled",
}


def translate(error: IdentityProviderError, table: Dict[str, str], fallback_prefix: str) -> str:
    """
    Message for a provider error.

    Known codes map through the table; anything else becomes
    ``"<fallback_prefix>: <provider message>"``.
    """
    if error.code in table:
        return table[error.code]
    return f"{fallback_prefix}: {error.message}"
