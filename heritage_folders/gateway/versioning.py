"""
API Versioning Module

URL-based versioning: every router is served under its plain prefix and
again under /<version>/ (e.g. /api/folders and /v1/api/folders).
"""
from enum import Enum
from typing import Dict, List

from fastapi import APIRouter

from ..core.logging_config import get_logger

logger = get_logger(__name__)


class APIVersion(str, Enum):
    """Supported API versions."""
    V1 = "v1"


class VersionRouter:
    """Keeps track of which routers are served under which version prefix."""

    def __init__(self):
        self._routers: Dict[APIVersion, List[APIRouter]] = {}

    def register(self, version: APIVersion, router: APIRouter):
        self._routers.setdefault(version, []).append(router)
        logger.debug(f"Registered router {router.prefix} for API version {version.value}")

    def get_all_versions(self) -> List[APIVersion]:
        """Get all registered API versions."""
        return list(self._routers.keys())
