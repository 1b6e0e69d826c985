"""
Base settings class for environment configuration.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        SUPPORT_EMAIL: str = ""

    settings = Settings()
    print(settings.PROFILE_STORE)
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """
    Base settings class with common configuration options.

    Automatically loads values from environment variables.
    Extend this class for application-specific settings.
    """

    # ==========================================================================
    # Identity Provider Settings
    # ==========================================================================
    FIREBASE_API_KEY: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CONTINUE_URI: str = "http://localhost"

    # ==========================================================================
    # Profile Store Settings
    # ==========================================================================
    PROFILE_STORE: str = "firestore"  # "firestore" or "mongodb"
    PROFILE_COLLECTION: str = "users"

    # MongoDB Settings (used when PROFILE_STORE = "mongodb")
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "smartsplit"

    # ==========================================================================
    # Runtime Settings
    # ==========================================================================
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # development, staging, production

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",  # Allow app-specific settings
        case_sensitive=True,
    )

    def get_log_level(self) -> str:
        """Effective log level; DEBUG wins over LOG_LEVEL."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL.upper()

    def validate_required(self) -> None:
        """
        Validate that required settings are configured.

        Raises:
            ValueError: If required settings are missing
        """
        errors = []

        if not self.FIREBASE_API_KEY:
            errors.append("FIREBASE_API_KEY is required for email/password authentication")

        if self.PROFILE_STORE not in ("firestore", "mongodb"):
            errors.append(
                f"PROFILE_STORE must be 'firestore' or 'mongodb', got '{self.PROFILE_STORE}'"
            )

        if (
            self.PROFILE_STORE == "firestore"
            and not self.FIREBASE_CREDENTIALS_PATH
            and not self.FIREBASE_PROJECT_ID
        ):
            errors.append(
                "FIREBASE_CREDENTIALS_PATH or FIREBASE_PROJECT_ID is required "
                "when using the Firestore profile store"
            )

        if self.PROFILE_STORE == "mongodb" and not self.MONGODB_URI:
            errors.append("MONGODB_URI is required when using the MongoDB profile store")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
