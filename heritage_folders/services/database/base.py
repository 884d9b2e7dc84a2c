"""
Abstract base class for database adapters.
All database implementations must inherit from this class.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class DatabaseInterface(ABC):
    """
    Abstract interface for folder persistence.

    The store holds flat folder records keyed by id and owns no business
    logic. Adapters must apply ``commit`` and build read results without
    yielding to the event loop in between, so a reader never observes a
    half-applied commit.
    """

    @abstractmethod
    async def get_folder(self, folder_id: str) -> Optional[Dict]:
        """Get a folder record by id."""
        pass

    @abstractmethod
    async def get_all_folders(self, site_id: Optional[int] = None) -> List[Dict]:
        """Get folder records, optionally restricted to one site."""
        pass

    @abstractmethod
    async def commit(self, upserts: List[Dict], deletes: List[str]) -> None:
        """
        Apply a set of writes as one unit.

        Args:
            upserts: Full folder records to create or replace
            deletes: Ids of folder records to remove
        """
        pass

    @abstractmethod
    async def initialize(self):
        """Initialize database (create collections, load files, etc.)."""
        pass

    @abstractmethod
    async def close(self):
        """Close database connection."""
        pass
