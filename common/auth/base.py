"""
Abstract identity provider interface.

Defines the contract that identity backends must implement, plus the
session bookkeeping every provider shares: the cached current session and
fan-out of auth-state changes to subscribers.

Example:
    from common.auth import FirebaseIdentityProvider

    provider = FirebaseIdentityProvider(api_key="...")
    session = await provider.sign_in_with_password("user@example.com", "secret")

    async with provider.subscribe() as changes:
        async for session in changes:
            print(session.uid if session else "signed out")
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Set

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Signed-in identity held by the provider."""

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None


class IdentityProviderError(Exception):
    """
    Failure reported by the identity provider.

    Attributes:
        code: Stable short code used for classification (e.g. "wrong-password")
        message: Provider's human-readable description
    """

    def __init__(self, code: str, message: str):
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.message = message


_CLOSED = object()


class AuthStateSubscription:
    """
    Handle for a stream of auth-state changes.

    Iterate it with ``async for`` to receive ``Session`` or ``None`` each
    time a session starts, ends or has its token refreshed. Call
    ``close()`` (or leave the ``async with`` block) to unsubscribe;
    iteration then stops after the already queued events.
    """

    def __init__(self, provider: "IdentityProvider"):
        self._provider = provider
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _push(self, session: Optional[Session]) -> None:
        if not self._closed:
            self._queue.put_nowait(session)

    def close(self) -> None:
        """Unsubscribe from the provider. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._provider._unsubscribe(self)
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> "AuthStateSubscription":
        return self

    async def __anext__(self) -> Optional[Session]:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            # Keep the handle exhausted for every later reader
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item

    async def __aenter__(self) -> "AuthStateSubscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()


class IdentityProvider(ABC):
    """
    Abstract identity provider.

    Implementations perform the remote calls; this base class keeps the
    current session and notifies subscribers whenever it changes. All
    remote operations are async.
    """

    def __init__(self):
        self._current_session: Optional[Session] = None
        self._subscribers: Set[AuthStateSubscription] = set()

    @property
    def current_session(self) -> Optional[Session]:
        """Session held in memory, or None when signed out. No I/O."""
        return self._current_session

    def _set_session(self, session: Optional[Session]) -> None:
        """Replace the current session and publish it to every subscriber."""
        self._current_session = session
        logger.debug(
            f"Auth state changed: {session.uid if session else 'signed out'} "
            f"({len(self._subscribers)} subscribers)"
        )
        for subscription in list(self._subscribers):
            subscription._push(session)

    def subscribe(self) -> AuthStateSubscription:
        """
        Subscribe to auth-state changes.

        The current state is delivered first, then every later change.

        Returns:
            AuthStateSubscription to iterate and eventually close
        """
        subscription = AuthStateSubscription(self)
        self._subscribers.add(subscription)
        subscription._push(self._current_session)
        return subscription

    def _unsubscribe(self, subscription: AuthStateSubscription) -> None:
        self._subscribers.discard(subscription)

    async def aclose(self) -> None:
        """Close every open subscription. Subclasses release their own resources."""
        for subscription in list(self._subscribers):
            subscription.close()

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> Optional[Session]:
        """
        Verify email and password credentials and start a session.

        Returns:
            The new session

        Raises:
            IdentityProviderError: If the provider rejects the credentials
        """
        pass

    @abstractmethod
    async def create_account(self, email: str, password: str) -> Optional[Session]:
        """
        Create a new email/password account and sign it in.

        Returns:
            The new session

        Raises:
            IdentityProviderError: If the account cannot be created
        """
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session."""
        pass

    @abstractmethod
    async def send_password_reset(self, email: str) -> None:
        """
        Ask the provider to email a password reset link.

        Raises:
            IdentityProviderError: If the email is unknown or invalid
        """
        pass

    @abstractmethod
    async def list_sign_in_methods(self, email: str) -> List[str]:
        """
        List sign-in methods registered for an email.

        Returns:
            Method names (e.g. ["password"]), empty when none
        """
        pass

    @abstractmethod
    async def set_display_name(self, session: Session, name: str) -> None:
        """Set the provider-side display name of a signed-in account."""
        pass
