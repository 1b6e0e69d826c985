"""
Abstract document store interface.

A document store keeps one structured record per identifier. Profile data
for signed-in users lives here, keyed by the identity provider's uid.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class DocumentStore(ABC):
    """Key/document storage used for user profiles."""

    @abstractmethod
    async def get(self, identifier: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the document stored under an identifier.

        Returns:
            The document, or None if it does not exist

        Raises:
            Exception: Backend errors propagate to the caller
        """
        pass

    @abstractmethod
    async def set(self, identifier: str, document: Dict[str, Any]) -> None:
        """Write a document under an identifier, replacing any existing one."""
        pass
