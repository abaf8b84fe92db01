"""
API Versioning Module

URL-based versioning: every router is mounted at the root path and again
under /api/<version>.
"""
from enum import Enum
from typing import Dict, List

from fastapi import APIRouter

from ..core.logging_config import get_logger

logger = get_logger(__name__)


class APIVersion(str, Enum):
    """Supported API versions."""
    V1 = "v1"
    
    @property
    def prefix(self) -> str:
        return f"/api/{self.value}"


class VersionRouter:
    """Keeps track of which routers are mounted under which version."""
    
    def __init__(self):
        self._routers: Dict[APIVersion, List[APIRouter]] = {}
    
    def register(self, version: APIVersion, router: APIRouter):
        self._routers.setdefault(version, []).append(router)
        logger.debug(f"Registered router for API version {version.value}")
    
    def get_all_versions(self) -> List[APIVersion]:
        """Get all registered API versions."""
        return list(self._routers.keys())
