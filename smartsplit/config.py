"""
SmartSplit application settings.

Extends the base settings with app-specific configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """SmartSplit-specific settings."""

    APP_NAME: str = "SmartSplit"


# Global settings instance
settings = Settings()
