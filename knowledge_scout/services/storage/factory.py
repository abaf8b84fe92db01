"""
Content Storage Factory for creating storage adapters.
Implements Factory Pattern for plug-and-play storage support.
"""
from pathlib import Path
from typing import Optional

from ...core.config import STORAGE_TYPE, UPLOAD_DIR
from ...core.logging_config import get_logger
from .base import ContentStorageInterface
from .local_storage import LocalFileStorage
from .memory_storage import MemoryContentStorage

logger = get_logger(__name__)


class ContentStorageFactory:
    """
    Factory for creating content storage adapters.
    Supports: local filesystem (durable, default) and in-memory (transient).
    """
    
    @staticmethod
    def create(storage_type: Optional[str] = None, **kwargs) -> ContentStorageInterface:
        """
        Create a storage adapter instance.
        
        Args:
            storage_type: 'local', 'memory', or None to use STORAGE_TYPE
            **kwargs: base_dir for local storage
        
        Returns:
            ContentStorageInterface instance
        """
        storage_type = (storage_type or STORAGE_TYPE).lower()
        
        if storage_type == "local":
            base_dir = kwargs.get("base_dir") or UPLOAD_DIR
            return LocalFileStorage(base_dir=Path(base_dir))
        elif storage_type == "memory":
            return MemoryContentStorage()
        else:
            raise ValueError(
                f"Unsupported storage type: {storage_type}. "
                f"Supported types: 'local', 'memory'"
            )
    
    @staticmethod
    async def create_and_initialize(storage_type: Optional[str] = None, **kwargs) -> ContentStorageInterface:
        """Create storage adapter and initialize it."""
        storage = ContentStorageFactory.create(storage_type, **kwargs)
        await storage.initialize()
        return storage
