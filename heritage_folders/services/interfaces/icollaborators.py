"""
Collaborator Interfaces.

Contracts for the systems the folder engine consumes but does not own:
the heritage site registry and the document store.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class ISiteRegistry(ABC):
    """
    Interface for the heritage site registry.
    """

    @abstractmethod
    async def site_exists(self, site_id: int) -> bool:
        """
        Check whether a heritage site is registered.

        Args:
            site_id: Heritage site id

        Returns:
            True if folders may be created for the site
        """
        pass


class IDocumentStore(ABC):
    """
    Interface for the document store.

    The store owns documents and decides what happens to them when their
    folders go away; the engine only asks and notifies.
    """

    @abstractmethod
    async def count_documents(self, folder_ids: List[str]) -> Dict[str, int]:
        """
        Count documents filed directly in each folder.

        Returns:
            Mapping of folder id to document count (missing ids count 0)
        """
        pass

    @abstractmethod
    async def deletion_blocked(self, folder_ids: List[str]) -> bool:
        """
        Check whether the store refuses deletion of these folders.

        Returns:
            True when the documents they hold must not be orphaned
        """
        pass

    @abstractmethod
    async def folders_deleted(self, folder_ids: List[str], fallback_folder_id: Optional[str]) -> int:
        """
        Deletion event for a committed folder or subtree removal.

        Args:
            folder_ids: Ids of the deleted folders
            fallback_folder_id: Parent of the deleted subtree (None for root level)

        Returns:
            Number of documents affected
        """
        pass
