"""
Local filesystem storage adapter implementing ContentStorageInterface.
Content survives restarts, so documents can be reprocessed later.
"""
import asyncio
from pathlib import Path

from ...api.exceptions import ContentUnavailableError
from ...core.logging_config import get_logger
from .base import ContentStorageInterface

logger = get_logger(__name__)


class LocalFileStorage(ContentStorageInterface):
    """
    Local filesystem storage adapter.
    Stores files in a local directory under UPLOAD_DIR.
    """
    
    durable = True
    
    def __init__(self, base_dir: Path):
        """
        Initialize local file storage.
        
        Args:
            base_dir: Base directory for file storage
        """
        self.base_dir = Path(base_dir)
    
    async def initialize(self):
        """Initialize storage - ensure base directory exists."""
        self.base_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Local storage directory: {self.base_dir}")
    
    async def close(self):
        """Close storage (no-op for local filesystem)."""
        pass
    
    def _get_full_path(self, ref: str) -> Path:
        """Get full filesystem path from storage reference."""
        # Only the final path component is used, which prevents directory traversal
        return self.base_dir / Path(ref).name
    
    async def save(self, content: bytes, key: str) -> str:
        """Save bytes to the local filesystem."""
        full_path = self._get_full_path(key)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        
        # Run in executor to avoid blocking
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, full_path.write_bytes, content)
        
        return full_path.name
    
    async def get(self, ref: str) -> bytes:
        """Retrieve a file from the local filesystem."""
        full_path = self._get_full_path(ref)
        
        if not full_path.exists():
            raise ContentUnavailableError("Original file no longer available")
        
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, full_path.read_bytes)
        except FileNotFoundError:
            raise ContentUnavailableError("Original file no longer available")
    
    async def exists(self, ref: str) -> bool:
        return self._get_full_path(ref).exists()
    
    async def delete(self, ref: str) -> bool:
        """Delete a file from the local filesystem."""
        full_path = self._get_full_path(ref)
        
        if not full_path.exists():
            return False
        
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, full_path.unlink)
        return True
