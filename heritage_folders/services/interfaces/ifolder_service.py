"""
Folder Service Interface.

Defines the contract for folder business logic operations.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ...domain.entities import Caller, Folder


class IFolderService(ABC):
    """
    Interface for folder business logic.

    Defines the contract for folder operations including:
    - Creation
    - Updates (fields and permissions)
    - Moving
    - Deletion
    """

    @abstractmethod
    async def create_folder(self, site_id: int, data: Dict[str, Any], caller: Optional[Caller] = None) -> Folder:
        """
        Create a new folder.

        Args:
            site_id: Owning heritage site
            data: name, description, type, parent_id, sort_order, allowed_roles
            caller: Who is asking (None for system context)

        Returns:
            Created Folder entity
        """
        pass

    @abstractmethod
    async def update_folder(self, folder_id: str, patch: Dict[str, Any], caller: Optional[Caller] = None) -> Folder:
        """
        Update name, description, type or sort order.

        Returns:
            Updated Folder entity
        """
        pass

    @abstractmethod
    async def update_folder_permissions(
        self,
        folder_id: str,
        allowed_roles: List[str],
        caller: Optional[Caller] = None
    ) -> Folder:
        """
        Replace the allowed roles of a folder.

        Returns:
            Updated Folder entity
        """
        pass

    @abstractmethod
    async def move_folder(self, folder_id: str, new_parent_id: Optional[str], caller: Optional[Caller] = None) -> Folder:
        """
        Move a folder under a new parent (None for root).

        Returns:
            Moved Folder entity
        """
        pass

    @abstractmethod
    async def delete_folder(self, folder_id: str, recursive: bool = False, caller: Optional[Caller] = None) -> List[str]:
        """
        Delete a folder, and its subtree when recursive.

        Returns:
            Ids of the deleted folders
        """
        pass
