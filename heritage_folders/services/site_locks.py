"""
Per-site write serialization.

Every mutation of a site's folder forest runs its read, validate and commit
steps while holding that site's lock. Sites never share a lock, and readers
never take one.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Dict

from ..core.logging_config import get_logger

logger = get_logger(__name__)


class SiteLockRegistry:
    """
    Hands out one asyncio.Lock per site id, created on first use.

    Locks are never released, so the registry grows with the number of
    distinct site ids it has seen. Site ids come from the bounded site
    registry, which keeps that number small.
    """

    def __init__(self):
        self._locks: Dict[int, asyncio.Lock] = {}

    def get_lock(self, site_id: int) -> asyncio.Lock:
        lock = self._locks.get(site_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[site_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, site_id: int):
        lock = self.get_lock(site_id)
        if lock.locked():
            logger.debug(f"Waiting for write lock on site {site_id}")
        async with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)
