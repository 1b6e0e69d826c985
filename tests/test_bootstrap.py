"""Tests for settings validation and gateway wiring."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from common.auth.firebase_auth import FirebaseIdentityProvider
from common.database.mongodb import MongoDocumentStore
from smartsplit.config import Settings
from smartsplit.dependencies import (
    create_identity_gateway,
    create_identity_provider,
    create_profile_store,
    identity_gateway,
)
from smartsplit.gateway import IdentityGateway


def _settings(**overrides) -> Settings:
    values = {
        "FIREBASE_API_KEY": "test-api-key",
        "FIREBASE_PROJECT_ID": "smartsplit-test",
        "PROFILE_STORE": "firestore",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettings:

    def test_valid_firestore_settings(self):
        _settings().validate_required()

    def test_missing_values_are_all_reported(self):
        settings = _settings(FIREBASE_API_KEY=None, FIREBASE_PROJECT_ID=None)

        with pytest.raises(ValueError) as exc_info:
            settings.validate_required()

        assert "FIREBASE_API_KEY" in str(exc_info.value)
        assert "FIREBASE_CREDENTIALS_PATH or FIREBASE_PROJECT_ID" in str(exc_info.value)

    def test_unknown_profile_store(self):
        with pytest.raises(ValueError, match="PROFILE_STORE"):
            _settings(PROFILE_STORE="redis").validate_required()

    def test_debug_overrides_log_level(self):
        assert _settings(LOG_LEVEL="warning").get_log_level() == "WARNING"
        assert _settings(LOG_LEVEL="warning", DEBUG=True).get_log_level() == "DEBUG"


class TestFactories:

    def test_identity_provider_from_settings(self):
        provider = create_identity_provider(_settings())

        assert isinstance(provider, FirebaseIdentityProvider)
        assert provider.current_session is None

    def test_mongodb_store_uses_configured_collection(self):
        mongodb = MagicMock()

        store = create_profile_store(
            _settings(PROFILE_STORE="mongodb", PROFILE_COLLECTION="profiles"), mongodb
        )

        assert isinstance(store, MongoDocumentStore)
        mongodb.get_collection.assert_called_once_with("profiles")

    def test_mongodb_store_requires_connection(self):
        with pytest.raises(ValueError):
            create_profile_store(_settings(PROFILE_STORE="mongodb"))

    def test_unknown_store(self):
        with pytest.raises(ValueError, match="Unknown profile store"):
            create_profile_store(_settings(PROFILE_STORE="redis"))

    def test_gateway_receives_explicit_dependencies(self, mock_provider, mock_store):
        gateway = create_identity_gateway(mock_provider, mock_store)

        assert isinstance(gateway, IdentityGateway)
        assert gateway.current_user is None


class TestIdentityGatewayContext:

    @pytest.mark.asyncio
    async def test_mongodb_lifecycle(self):
        mongodb = MagicMock()
        mongodb.connect = AsyncMock()
        mongodb.disconnect = AsyncMock()
        settings = _settings(PROFILE_STORE="mongodb", MONGODB_URI="mongodb://db:27017")

        with patch("smartsplit.dependencies.MongoDB", return_value=mongodb), \
                patch("smartsplit.dependencies.configure_logging") as configure:
            async with identity_gateway(settings) as gateway:
                assert isinstance(gateway, IdentityGateway)
                changes = gateway.auth_state_changes()
                mongodb.disconnect.assert_not_awaited()

        configure.assert_called_once_with("INFO")
        mongodb.connect.assert_awaited_once_with(
            uri="mongodb://db:27017", database_name="smartsplit"
        )
        mongodb.disconnect.assert_awaited_once()
        assert changes.closed

    @pytest.mark.asyncio
    async def test_firestore_initializes_firebase_app(self):
        settings = _settings(FIREBASE_CREDENTIALS_PATH="service-account.json")

        with patch("smartsplit.dependencies.initialize_firebase_app") as init_app, \
                patch("smartsplit.dependencies.FirestoreDocumentStore") as store_cls, \
                patch("smartsplit.dependencies.configure_logging"):
            async with identity_gateway(settings) as gateway:
                assert isinstance(gateway, IdentityGateway)

        init_app.assert_called_once_with(
            credentials_path="service-account.json", project_id="smartsplit-test"
        )
        store_cls.from_app.assert_called_once_with(collection="users")

    @pytest.mark.asyncio
    async def test_invalid_settings_fail_before_connecting(self):
        with patch("smartsplit.dependencies.MongoDB") as mongodb_cls:
            with pytest.raises(ValueError):
                async with identity_gateway(_settings(FIREBASE_API_KEY=None)):
                    pass

        mongodb_cls.assert_not_called()
