"""
In-memory storage adapter implementing ContentStorageInterface.

Bytes are kept only until the first processing run finishes, matching
ephemeral deployments that cannot write to disk. After that a document
can no longer be reprocessed.
"""
from typing import Dict

from ...api.exceptions import ContentUnavailableError
from ...core.logging_config import get_logger
from .base import ContentStorageInterface

logger = get_logger(__name__)

MEMORY_REF_PREFIX = "memory://"


class MemoryContentStorage(ContentStorageInterface):
    """Transient storage adapter backed by a dict."""
    
    durable = False
    
    def __init__(self):
        self._content: Dict[str, bytes] = {}
    
    async def initialize(self):
        self._content.clear()
    
    async def close(self):
        self._content.clear()
    
    async def save(self, content: bytes, key: str) -> str:
        ref = f"{MEMORY_REF_PREFIX}{key}"
        self._content[ref] = content
        return ref
    
    async def get(self, ref: str) -> bytes:
        try:
            return self._content[ref]
        except KeyError:
            raise ContentUnavailableError(
                "Original file no longer available (in-memory storage keeps content only until first processing)"
            )
    
    async def exists(self, ref: str) -> bool:
        return ref in self._content
    
    async def delete(self, ref: str) -> bool:
        return self._content.pop(ref, None) is not None
    
    async def release(self, ref: str) -> None:
        """Drop content once the first processing run is done."""
        if self._content.pop(ref, None) is not None:
            logger.debug(f"Released in-memory content for {ref}")
