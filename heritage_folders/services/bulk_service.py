"""
Bulk Creation Orchestrator.

Creates many folders in one request, one at a time. Each item goes through
the regular create path, so it is validated against everything the batch
has already committed. Failures are reported per item; nothing is rolled back.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .interfaces import IFolderService
from ..api.exceptions import FolderEngineError
from ..core.logging_config import get_logger
from ..domain.entities import Caller, Folder

logger = get_logger(__name__)


@dataclass
class BulkItemFailure:
    index: int
    name: Optional[str]
    error: str
    message: str


@dataclass
class BulkResult:
    """Outcome of a bulk creation batch."""
    created_folders: List[Folder] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    failed: List[BulkItemFailure] = field(default_factory=list)

    @property
    def created(self) -> int:
        return len(self.created_folders)

    def summary(self) -> Dict[str, int]:
        return {"created": self.created, "skipped": len(self.skipped), "failed": len(self.failed)}


class BulkFolderCreator:
    """
    Runs folder creation specs sequentially through the folder service.
    """

    def __init__(self, folder_service: IFolderService):
        self.folder_service = folder_service

    async def bulk_create(
        self,
        site_id: int,
        specs: List[Dict[str, Any]],
        caller: Optional[Caller] = None
    ) -> BulkResult:
        """
        Create folders from a list of specs.

        Args:
            site_id: Heritage site receiving the folders
            specs: Dicts accepted by create_folder (name, description, type, ...)
            caller: Who is asking (None for system context)

        Returns:
            BulkResult with created folders, skipped indexes and failures
        """
        result = BulkResult()

        for index, spec in enumerate(specs):
            name = spec.get("name")
            if not name or not str(name).strip():
                result.skipped.append(index)
                continue

            try:
                folder = await self.folder_service.create_folder(site_id, spec, caller=caller)
                result.created_folders.append(folder)
            except FolderEngineError as e:
                logger.warning(f"Bulk item {index} ('{name}') rejected: {e.kind}: {e.message}")
                result.failed.append(BulkItemFailure(index=index, name=name, error=e.kind, message=e.message))

        logger.info(f"Bulk create in site {site_id}: {result.summary()}")
        return result
