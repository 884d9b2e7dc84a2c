"""
Default implementations of the external collaborators.

Production deployments swap these for clients of the real heritage site
registry and document store; the in-process versions back local runs and tests.
"""
from typing import Dict, Iterable, List, Optional

from .interfaces.icollaborators import IDocumentStore, ISiteRegistry
from ..core.logging_config import get_logger

logger = get_logger(__name__)

CASCADE_POLICIES = ("reassign", "delete", "reject")


class ConfiguredSiteRegistry(ISiteRegistry):
    """
    Site registry backed by a fixed list of site ids.
    An empty list accepts every site.
    """

    def __init__(self, site_ids: Optional[Iterable[int]] = None):
        self._site_ids = set(site_ids or [])

    def register(self, site_id: int) -> None:
        self._site_ids.add(site_id)

    async def site_exists(self, site_id: int) -> bool:
        if not self._site_ids:
            return True
        return site_id in self._site_ids


class InMemoryDocumentStore(IDocumentStore):
    """
    Document store that only tracks which folder each document is filed in.

    Cascade policies for deleted folders:
        reassign: documents move to the deleted subtree's parent (unfiled at root level)
        delete:   documents are removed
        reject:   deleting folders that hold documents is refused
    """

    def __init__(self, policy: str = "reassign"):
        if policy not in CASCADE_POLICIES:
            raise ValueError(
                f"Unsupported cascade policy: {policy}. "
                f"Supported policies: {', '.join(CASCADE_POLICIES)}"
            )
        self.policy = policy
        # document id -> folder id (None means unfiled)
        self._documents: Dict[str, Optional[str]] = {}

    def file_document(self, document_id: str, folder_id: Optional[str]) -> None:
        self._documents[document_id] = folder_id

    def folder_of(self, document_id: str) -> Optional[str]:
        return self._documents.get(document_id)

    def __len__(self) -> int:
        return len(self._documents)

    async def count_documents(self, folder_ids: List[str]) -> Dict[str, int]:
        wanted = set(folder_ids)
        counts = {folder_id: 0 for folder_id in folder_ids}
        for folder_id in self._documents.values():
            if folder_id in wanted:
                counts[folder_id] += 1
        return counts

    async def deletion_blocked(self, folder_ids: List[str]) -> bool:
        if self.policy != "reject":
            return False
        wanted = set(folder_ids)
        return any(folder_id in wanted for folder_id in self._documents.values())

    async def folders_deleted(self, folder_ids: List[str], fallback_folder_id: Optional[str]) -> int:
        wanted = set(folder_ids)
        affected = [doc_id for doc_id, folder_id in self._documents.items() if folder_id in wanted]

        for doc_id in affected:
            if self.policy == "delete":
                del self._documents[doc_id]
            else:
                self._documents[doc_id] = fallback_folder_id

        if affected:
            logger.info(
                f"Applied '{self.policy}' to {len(affected)} documents from {len(folder_ids)} deleted folders"
            )
        return len(affected)
