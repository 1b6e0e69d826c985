"""
Utilities module - Logging setup.
"""

from common.utils.logging import configure_logging

__all__ = ["configure_logging"]
