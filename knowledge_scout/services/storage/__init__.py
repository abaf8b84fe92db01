"""
Content storage abstraction layer for plug-and-play storage support.
"""
from .base import ContentStorageInterface
from .local_storage import LocalFileStorage
from .memory_storage import MemoryContentStorage
from .factory import ContentStorageFactory

__all__ = [
    "ContentStorageInterface",
    "LocalFileStorage",
    "MemoryContentStorage",
    "ContentStorageFactory",
]
