"""Shared test fixtures for the identity gateway tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from common.auth.base import IdentityProvider, Session
from smartsplit.gateway import IdentityGateway


@pytest.fixture
def sample_uid():
    return "uid_8f3a1c"


@pytest.fixture
def sample_session(sample_uid):
    return Session(
        uid=sample_uid,
        email="anna@example.com",
        display_name="Anna",
        id_token="id-token",
        refresh_token="refresh-token",
    )


@pytest.fixture
def sample_profile_doc(sample_uid):
    return {
        "uid": sample_uid,
        "email": "anna@example.com",
        "name": "Anna Svensson",
        "phoneNumber": "+46701234567",
    }


@pytest.fixture
def mock_provider():
    provider = MagicMock(spec=IdentityProvider)
    provider.current_session = None
    provider.sign_in_with_password = AsyncMock()
    provider.create_account = AsyncMock()
    provider.sign_out = AsyncMock()
    provider.send_password_reset = AsyncMock()
    provider.list_sign_in_methods = AsyncMock(return_value=[])
    provider.set_display_name = AsyncMock()
    return provider


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.get = AsyncMock(return_value=None)
    store.set = AsyncMock()
    return store


@pytest.fixture
def gateway(mock_provider, mock_store):
    return IdentityGateway(mock_provider, mock_store)


@pytest.fixture
def mock_collection():
    # Motor collection methods used by the store are all coroutines
    return AsyncMock()
