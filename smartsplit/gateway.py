"""
Identity gateway.

Thin facade over an identity provider and a profile document store. Every
operation is a single pass-through call; provider error codes are
translated into GatewayError messages the UI can show verbatim.

Example:
    gateway = IdentityGateway(provider, store)

    try:
        profile = await gateway.sign_in("user@example.com", "secret")
    except GatewayError as e:
        show(e.message)
"""

import logging
from typing import Optional

from common.auth.base import AuthStateSubscription, IdentityProvider, IdentityProviderError
from common.database.base_store import DocumentStore
from smartsplit.errors import (
    REGISTRATION_ERRORS,
    RESET_PASSWORD_ERRORS,
    SIGN_IN_ERRORS,
    GatewayError,
    translate,
)
from smartsplit.models import UserProfile


class IdentityGateway:
    """
    Sign-in, registration, password reset and sign-out for the app.

    Holds no state of its own between calls; the session lives in the
    provider and profiles live in the store.
    """

    def __init__(
        self,
        provider: IdentityProvider,
        store: DocumentStore,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            provider: Identity provider handling credentials and sessions
            store: Document store holding one profile per uid
            logger: Diagnostics logger (defaults to this module's logger)
        """
        self._provider = provider
        self._store = store
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    @property
    def current_user(self) -> Optional[UserProfile]:
        """
        Basic profile for the signed-in session, or None.

        Built from session fields only; use get_user_data() for the
        stored profile.
        """
        session = self._provider.current_session
        if session is None:
            return None
        return UserProfile.from_session(session)

    async def get_user_data(self, uid: str) -> Optional[UserProfile]:
        """
        Fetch the stored profile for a uid.

        Returns None when the document is missing or cannot be read or
        parsed; the two cases are not distinguished.
        """
        try:
            document = await self._store.get(uid)
            if document is None:
                return None
            return UserProfile.from_document(document, uid=uid)
        except Exception as e:
            self._logger.warning(f"Error fetching user data: {e}")
            return None

    async def sign_in(self, email: str, password: str) -> Optional[UserProfile]:
        """
        Sign in with email and password.

        Returns:
            The stored profile, or None if it could not be loaded even
            though sign-in succeeded

        Raises:
            GatewayError: If sign-in fails
        """
        self._logger.debug(f"Attempting login for email: {email}")
        try:
            session = await self._provider.sign_in_with_password(email, password)
        except IdentityProviderError as e:
            self._logger.debug(f"Login error: {e.code}")
            raise GatewayError(translate(e, SIGN_IN_ERRORS, "Login failed")) from e
        except Exception as e:
            self._logger.warning(f"Login error: {e}")
            raise GatewayError("An error occurred during login") from e

        if session is None:
            raise GatewayError("Login failed")

        self._logger.debug(f"Login successful for: {email}")
        return await self.get_user_data(session.uid)

    async def sign_out(self) -> None:
        """
        Raises:
            GatewayError: If the provider fails to sign out
        """
        try:
            await self._provider.sign_out()
        except Exception as e:
            self._logger.warning(f"Sign out error: {e}")
            raise GatewayError("Failed to sign out") from e
        self._logger.debug("User signed out successfully")

    async def reset_password(self, email: str) -> None:
        """
        Send a password reset email.

        Raises:
            GatewayError: If the email cannot be sent
        """
        try:
            await self._provider.send_password_reset(email)
        except IdentityProviderError as e:
            self._logger.debug(f"Password reset error: {e.code}")
            raise GatewayError(
                translate(e, RESET_PASSWORD_ERRORS, "Failed to send reset email")
            ) from e
        except Exception as e:
            self._logger.warning(f"Password reset error: {e}")
            raise GatewayError("An error occurred during password reset") from e
        self._logger.debug(f"Password reset email sent to {email}")

    async def is_email_in_use(self, email: str) -> bool:
        """
        True if any sign-in method is registered for the email.

        Lookup failures return False.
        """
        try:
            methods = await self._provider.list_sign_in_methods(email)
        except Exception as e:
            self._logger.warning(f"Email check error: {e}")
            return False
        return len(methods) > 0

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        phone_number: str,
    ) -> UserProfile:
        """
        Create an account and store its profile.

        The stored profile is built from the arguments, not re-read from
        the provider.

        Raises:
            GatewayError: If any step fails
        """
        self._logger.debug(f"Attempting registration for email: {email}")
        try:
            session = await self._provider.create_account(email, password)
            if session is not None:
                await self._provider.set_display_name(session, name)
                new_user = UserProfile(
                    uid=session.uid,
                    email=email,
                    name=name,
                    phone_number=phone_number,
                )
                await self._store.set(session.uid, new_user.to_document())
        except IdentityProviderError as e:
            self._logger.debug(f"Registration error: {e.code}")
            raise GatewayError(
                translate(e, REGISTRATION_ERRORS, "Registration failed")
            ) from e
        except Exception as e:
            self._logger.warning(f"Registration error: {e}")
            raise GatewayError("An error occurred during registration") from e

        if session is None:
            raise GatewayError("Registration failed")

        self._logger.debug(f"Registration successful for: {email}")
        self._logger.debug(f"User stored with UID: {session.uid}")
        return new_user

    def auth_state_changes(self) -> AuthStateSubscription:
        """
        Subscribe to session changes.

        Yields the current session (or None) first, then one value per
        sign-in, sign-out or token refresh. Close the handle when done.
        """
        return self._provider.subscribe()
