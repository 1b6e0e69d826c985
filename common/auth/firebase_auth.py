"""
Firebase identity provider.

Speaks the Firebase Identity Toolkit REST API with a Web API key, the same
calls the Firebase client SDKs make, and keeps the resulting session in
memory. Also provides the Firebase Admin app bootstrap used by the
Firestore document store.

Example:
    provider = FirebaseIdentityProvider(api_key=os.environ["FIREBASE_API_KEY"])

    session = await provider.sign_in_with_password("user@example.com", "password123")
    print(session.uid)

    await provider.sign_out()
    await provider.aclose()
"""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import firebase_admin
import httpx
from firebase_admin import credentials

from common.auth.base import IdentityProvider, IdentityProviderError, Session

logger = logging.getLogger(__name__)


# REST error string -> stable provider code
REST_ERROR_CODES: Dict[str, str] = {
    "EMAIL_NOT_FOUND": "user-not-found",
    "USER_NOT_FOUND": "user-not-found",
    "INVALID_PASSWORD": "wrong-password",
    "INVALID_EMAIL": "invalid-email",
    "USER_DISABLED": "user-disabled",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "too-many-requests",
    "EMAIL_EXISTS": "email-already-in-use",
    "WEAK_PASSWORD": "weak-password",
    "OPERATION_NOT_ALLOWED": "operation-not-allowed",
    "PASSWORD_LOGIN_DISABLED": "operation-not-allowed",
    "INVALID_LOGIN_CREDENTIALS": "invalid-credential",
    "TOKEN_EXPIRED": "user-token-expired",
    "INVALID_ID_TOKEN": "invalid-user-token",
}

ERROR_DESCRIPTIONS: Dict[str, str] = {
    "user-not-found": "There is no user record corresponding to this identifier.",
    "wrong-password": "The password is invalid or the user does not have a password.",
    "invalid-email": "The email address is badly formatted.",
    "user-disabled": "The user account has been disabled by an administrator.",
    "too-many-requests": "Access to this account has been temporarily disabled due to many failed login attempts.",
    "email-already-in-use": "The email address is already in use by another account.",
    "operation-not-allowed": "Password sign-in is disabled for this project.",
    "invalid-credential": "The supplied auth credential is incorrect, malformed or has expired.",
    "user-token-expired": "The user's credential is no longer valid. The user must sign in again.",
    "invalid-user-token": "This user's credential isn't valid for this project.",
}


def parse_rest_error(raw: str) -> IdentityProviderError:
    """
    Build an IdentityProviderError from a REST ``error.message`` string.

    The API sends either a bare code (``EMAIL_NOT_FOUND``) or a code with
    detail (``WEAK_PASSWORD : Password should be at least 6 characters``).
    """
    rest_code, _, detail = raw.partition(" : ")
    rest_code = rest_code.strip()
    code = REST_ERROR_CODES.get(rest_code, rest_code.lower().replace("_", "-"))
    message = detail.strip() or ERROR_DESCRIPTIONS.get(code, raw)
    return IdentityProviderError(code, message)


def _get_firebase_credentials_from_env() -> Optional[Dict[str, Any]]:
    """
    Build service account credentials from environment variables.

    Returns None unless PROJECT_ID, PRIVATE_KEY and CLIENT_EMAIL are all set.
    """
    for field in ("PROJECT_ID", "PRIVATE_KEY", "CLIENT_EMAIL"):
        if not os.environ.get(field):
            return None

    return {
        "type": os.environ.get("TYPE", "service_account"),
        "project_id": os.environ["PROJECT_ID"],
        "private_key_id": os.environ.get("PRIVATE_KEY_ID", ""),
        "private_key": os.environ["PRIVATE_KEY"].replace("\\n", "\n"),
        "client_email": os.environ["CLIENT_EMAIL"],
        "client_id": os.environ.get("CLIENT_ID", ""),
        "token_uri": os.environ.get("TOKEN_URI", "https://oauth2.googleapis.com/token"),
    }


def initialize_firebase_app(
    credentials_path: Optional[str] = None,
    project_id: Optional[str] = None,
) -> firebase_admin.App:
    """
    Initialize the default Firebase Admin app once per process.

    Credentials come from the service account file, then service account
    fields in the environment, then Application Default Credentials.

    Returns:
        The default firebase_admin.App
    """
    if firebase_admin._apps:
        return firebase_admin.get_app()

    if credentials_path:
        cred = credentials.Certificate(credentials_path)
    else:
        env_credentials = _get_firebase_credentials_from_env()
        if env_credentials:
            cred = credentials.Certificate(env_credentials)
        else:
            cred = credentials.ApplicationDefault()

    options = {}
    if project_id:
        options["projectId"] = project_id

    try:
        app = firebase_admin.initialize_app(cred, options)
    except Exception as e:
        logger.error(f"Firebase initialization error: {e}")
        raise
    logger.info("Firebase initialized successfully")
    return app


class FirebaseIdentityProvider(IdentityProvider):
    """
    Firebase Authentication over the Identity Toolkit REST API.

    Handles:
    - Email/password sign-in and sign-up
    - Password reset emails
    - Sign-in method lookup
    - Display name updates
    - ID token refresh
    """

    FIREBASE_AUTH_URL = "https://identitytoolkit.googleapis.com/v1/accounts"
    SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"

    def __init__(
        self,
        api_key: str,
        http_client: Optional[httpx.AsyncClient] = None,
        continue_uri: str = "http://localhost",
    ):
        """
        Initialize Firebase identity provider.

        Args:
            api_key: Firebase Web API key
            http_client: Shared AsyncClient (one is created and owned if omitted)
            continue_uri: Continue URL required by the createAuthUri lookup
        """
        super().__init__()
        if not api_key:
            raise ValueError(
                "Firebase API key is required for email/password authentication. "
                "Set FIREBASE_API_KEY environment variable."
            )
        self._api_key = api_key
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient()
        self._continue_uri = continue_uri

    async def _post(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        response = await self._http.post(url, params={"key": self._api_key}, **kwargs)
        if response.status_code != 200:
            try:
                raw = response.json().get("error", {}).get("message", "UNKNOWN_ERROR")
            except ValueError:
                raw = f"HTTP {response.status_code}"
            logger.debug(f"Identity Toolkit error from {url}: {raw}")
            raise parse_rest_error(raw)
        return response.json()

    async def _accounts(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post(f"{self.FIREBASE_AUTH_URL}:{endpoint}", json=payload)

    @staticmethod
    def _expiry(expires_in: Optional[str]) -> Optional[datetime]:
        if not expires_in:
            return None
        return datetime.now(timezone.utc) + timedelta(seconds=int(expires_in))

    def _session_from_response(self, data: Dict[str, Any]) -> Optional[Session]:
        uid = data.get("localId")
        if not uid:
            return None
        return Session(
            uid=uid,
            email=data.get("email"),
            display_name=data.get("displayName") or None,
            phone_number=data.get("phoneNumber"),
            id_token=data.get("idToken"),
            refresh_token=data.get("refreshToken"),
            expires_at=self._expiry(data.get("expiresIn")),
        )

    async def sign_in_with_password(self, email: str, password: str) -> Optional[Session]:
        data = await self._accounts(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        session = self._session_from_response(data)
        if session:
            self._set_session(session)
        return session

    async def create_account(self, email: str, password: str) -> Optional[Session]:
        data = await self._accounts(
            "signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        session = self._session_from_response(data)
        if session:
            self._set_session(session)
        return session

    async def sign_out(self) -> None:
        # Firebase has no server-side sign-out for ID tokens; drop the local session.
        self._set_session(None)

    async def send_password_reset(self, email: str) -> None:
        await self._accounts("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})

    async def list_sign_in_methods(self, email: str) -> List[str]:
        data = await self._accounts(
            "createAuthUri",
            {"identifier": email, "continueUri": self._continue_uri},
        )
        return list(data.get("signinMethods", []))

    async def set_display_name(self, session: Session, name: str) -> None:
        data = await self._accounts(
            "update",
            {"idToken": session.id_token, "displayName": name, "returnSecureToken": True},
        )
        session.display_name = data.get("displayName", name)
        if data.get("idToken"):
            session.id_token = data["idToken"]
            session.refresh_token = data.get("refreshToken", session.refresh_token)
            session.expires_at = self._expiry(data.get("expiresIn")) or session.expires_at

    async def refresh_session(self) -> Optional[Session]:
        """
        Exchange the refresh token for a new ID token.

        Publishes the refreshed session to subscribers.

        Returns:
            The refreshed session, or None when signed out
        """
        current = self._current_session
        if current is None or not current.refresh_token:
            return None

        data = await self._post(
            self.SECURE_TOKEN_URL,
            data={"grant_type": "refresh_token", "refresh_token": current.refresh_token},
        )
        refreshed = Session(
            uid=data.get("user_id", current.uid),
            email=current.email,
            display_name=current.display_name,
            phone_number=current.phone_number,
            id_token=data.get("id_token"),
            refresh_token=data.get("refresh_token", current.refresh_token),
            expires_at=self._expiry(data.get("expires_in")),
        )
        if self._current_session is not current:
            # Signed out or replaced while the request was in flight
            logger.debug("Discarding token refresh for a session that is no longer current")
            return None
        self._set_session(refreshed)
        return refreshed

    async def aclose(self) -> None:
        await super().aclose()
        if self._owns_client:
            await self._http.aclose()
