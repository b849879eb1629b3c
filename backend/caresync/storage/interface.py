"""
Storage Interface - Abstract base class for all storage implementations.
The care data layer only talks to this interface, so the backing store can be
swapped (filesystem today, object storage or a database later).
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any


class StorageInterface(ABC):
    """
    Abstract storage interface that defines the contract for all storage implementations.
    """

    @abstractmethod
    async def save(
        self,
        path: str,
        content: bytes | str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> bool:
        """
        Save content to the specified path, replacing what is there.

        Args:
            path: Relative path (e.g., "care/dose_history.json")
            content: Content to save (bytes for binary files, str for text)
            metadata: Optional metadata to store alongside the content

        Returns:
            bool: True if save was successful, False otherwise
        """
        pass

    @abstractmethod
    async def load(self, path: str) -> Optional[bytes]:
        """
        Load content from the specified path.

        Returns:
            Optional[bytes]: Content, or None if nothing is stored at ``path``
        """
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check if content exists at the specified path."""
        pass

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """
        Delete content at the specified path.

        Returns:
            bool: True if something was deleted
        """
        pass

    @abstractmethod
    async def list(self, path: str, pattern: Optional[str] = None) -> List[str]:
        """
        List files directly under a directory.

        Args:
            path: Directory path to list
            pattern: Optional glob pattern to filter files (e.g., "*.json")

        Returns:
            List[str]: Sorted relative file paths
        """
        pass
