"""
Local Filesystem Storage Implementation.
Stores care records as files under a base directory on the server.
"""

import json
import logging
import aiofiles
from pathlib import Path
from typing import Optional, List, Dict, Any
from .interface import StorageInterface

logger = logging.getLogger(__name__)


class LocalStorage(StorageInterface):
    """
    Local filesystem storage implementation.
    All paths are relative to ``base_dir``.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Base directory for all stored files
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, path: str) -> Path:
        """Convert a relative path to an absolute path inside base_dir."""
        full_path = (self.base_dir / path).resolve()

        if full_path != self.base_dir and self.base_dir not in full_path.parents:
            raise ValueError(f"Invalid path: {path} - path traversal detected")

        return full_path

    async def save(
        self,
        path: str,
        content: bytes | str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> bool:
        """Save content to the local filesystem."""
        try:
            full_path = self._get_full_path(path)
            full_path.parent.mkdir(parents=True, exist_ok=True)

            if isinstance(content, str):
                async with aiofiles.open(full_path, 'w', encoding='utf-8') as f:
                    await f.write(content)
            else:
                async with aiofiles.open(full_path, 'wb') as f:
                    await f.write(content)

            if metadata:
                metadata_path = full_path.with_suffix(full_path.suffix + '.meta')
                async with aiofiles.open(metadata_path, 'w', encoding='utf-8') as f:
                    await f.write(json.dumps(metadata, indent=2, default=str))

            return True
        except (OSError, ValueError) as e:
            logger.error(f"Error saving file {path}: {e}")
            return False

    async def load(self, path: str) -> Optional[bytes]:
        """Load content from the local filesystem."""
        try:
            full_path = self._get_full_path(path)
            if not full_path.exists():
                return None

            async with aiofiles.open(full_path, 'rb') as f:
                return await f.read()
        except (OSError, ValueError) as e:
            logger.error(f"Error loading file {path}: {e}")
            return None

    async def exists(self, path: str) -> bool:
        try:
            return self._get_full_path(path).exists()
        except ValueError:
            return False

    async def delete(self, path: str) -> bool:
        """Delete a file and its metadata sidecar."""
        try:
            full_path = self._get_full_path(path)
            if not full_path.exists():
                return False

            full_path.unlink()
            metadata_path = full_path.with_suffix(full_path.suffix + '.meta')
            if metadata_path.exists():
                metadata_path.unlink()
            return True
        except (OSError, ValueError) as e:
            logger.error(f"Error deleting file {path}: {e}")
            return False

    async def list(self, path: str, pattern: Optional[str] = None) -> List[str]:
        """List files in a directory, skipping metadata sidecars."""
        try:
            full_path = self._get_full_path(path)
            if not full_path.exists():
                return []

            files = [p for p in full_path.glob(pattern or "*") if p.is_file()]
            return sorted(
                str(p.relative_to(self.base_dir))
                for p in files
                if p.suffix != '.meta'
            )
        except (OSError, ValueError) as e:
            logger.error(f"Error listing files in {path}: {e}")
            return []
