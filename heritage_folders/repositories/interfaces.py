"""
Repository interfaces - Define contracts for data access.
Business logic depends on these interfaces, not concrete implementations.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.entities import Folder


class IFolderRepository(ABC):
    """
    Interface for folder data access.
    """

    @abstractmethod
    async def get_by_id(self, folder_id: str) -> Optional[Folder]:
        """Get folder by id."""
        pass

    @abstractmethod
    async def list_by_site(self, site_id: int) -> List[Folder]:
        """Get every folder of one site."""
        pass

    @abstractmethod
    async def list_all(self) -> List[Folder]:
        """Get every folder of every site."""
        pass

    @abstractmethod
    async def save_changes(
        self,
        upserts: Optional[List[Folder]] = None,
        deletes: Optional[List[str]] = None
    ) -> None:
        """Persist created/changed folders and removals as one unit."""
        pass
