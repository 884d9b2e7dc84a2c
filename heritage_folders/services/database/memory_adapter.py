"""
In-memory adapter implementing DatabaseInterface.
Perfect for demos and testing - stores all data in memory using Python dicts.
Data is lost on restart (on-demand, no persistence).
"""
from typing import Dict, List, Optional
import copy

from .base import DatabaseInterface
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class MemoryAdapter(DatabaseInterface):
    """
    In-memory database adapter using Python dictionaries.
    Data is lost when the application restarts.
    """

    def __init__(self):
        # In-memory storage: folders dict by id
        self._folders: Dict[str, Dict] = {}

        # Index for fast per-site lookups
        self._site_index: Dict[int, List[str]] = {}

    async def initialize(self):
        """Initialize database (no-op for in-memory, but required by interface)."""
        # Clear any existing data (useful for testing)
        self._folders.clear()
        self._site_index.clear()

    async def close(self):
        """Close database connection (no-op for in-memory)."""
        pass

    async def get_folder(self, folder_id: str) -> Optional[Dict]:
        folder = self._folders.get(folder_id)
        return copy.deepcopy(folder) if folder else None

    async def get_all_folders(self, site_id: Optional[int] = None) -> List[Dict]:
        if site_id is None:
            return [copy.deepcopy(folder) for folder in self._folders.values()]
        folder_ids = self._site_index.get(site_id, [])
        return [copy.deepcopy(self._folders[fid]) for fid in folder_ids if fid in self._folders]

    async def commit(self, upserts: List[Dict], deletes: List[str]) -> None:
        # No awaits below: the whole commit lands in one event-loop step
        self._apply(upserts, deletes)

    def _apply(self, upserts: List[Dict], deletes: List[str]) -> None:
        self._apply_to(self._folders, self._site_index, upserts, deletes)

    @staticmethod
    def _apply_to(
        folders: Dict[str, Dict],
        site_index: Dict[int, List[str]],
        upserts: List[Dict],
        deletes: List[str]
    ) -> None:
        if any(not record.get("id") for record in upserts):
            raise ValueError("Folder must have an 'id' field")

        for record in upserts:
            folder_id = record["id"]
            folders[folder_id] = copy.deepcopy(record)

            site_ids = site_index.setdefault(record["site_id"], [])
            if folder_id not in site_ids:
                site_ids.append(folder_id)

        for folder_id in deletes:
            record = folders.pop(folder_id, None)
            if record is None:
                continue
            site_ids = site_index.get(record["site_id"], [])
            if folder_id in site_ids:
                site_ids.remove(folder_id)

