"""
Abstract base class for content storage adapters.
All storage implementations must inherit from this class.
"""
from abc import ABC, abstractmethod


class ContentStorageInterface(ABC):
    """
    Abstract interface for the raw bytes behind uploaded documents.
    
    A storage reference returned by save() is what gets persisted on the
    Document row. Adapters raise ContentUnavailableError from get() when
    the bytes can no longer be located.
    """
    
    #: True when content outlives the first processing run.
    durable: bool = True
    
    @abstractmethod
    async def save(self, content: bytes, key: str) -> str:
        """
        Store raw bytes.
        
        Args:
            content: File contents
            key: Storage key, normally the stored filename
        
        Returns:
            Storage reference to persist for later retrieval
        """
        pass
    
    @abstractmethod
    async def get(self, ref: str) -> bytes:
        """
        Retrieve stored bytes.
        
        Args:
            ref: Storage reference returned by save()
        
        Returns:
            File contents as bytes
        
        Raises:
            ContentUnavailableError: If the content is gone
        """
        pass
    
    @abstractmethod
    async def exists(self, ref: str) -> bool:
        pass
    
    @abstractmethod
    async def delete(self, ref: str) -> bool:
        """
        Delete stored bytes.
        
        Returns:
            True if content was deleted, False if not found
        """
        pass
    
    async def release(self, ref: str) -> None:
        """Called once the first processing run for ref has finished."""
        return None
    
    @abstractmethod
    async def initialize(self):
        """Initialize storage (create directories, etc.)."""
        pass
    
    @abstractmethod
    async def close(self):
        """Close storage (cleanup)."""
        pass
