"""
Folder Repository - Concrete implementation of folder data access.
"""
from datetime import datetime
from typing import List, Optional

from .interfaces import IFolderRepository
from ..domain.entities import Folder
from ..domain.value_objects import FolderType
from ..services.database.base import DatabaseInterface
from ..core.logging_config import get_logger

logger = get_logger(__name__)


class FolderRepository(IFolderRepository):
    """
    Repository for folder data access.
    Maps domain entities to database records.
    """

    def __init__(self, db_service: DatabaseInterface):
        """
        Initialize repository with database service.

        Args:
            db_service: Database adapter (dependency injection)
        """
        self._db = db_service

    def _to_entity(self, data: dict) -> Folder:
        """Convert database record to domain entity."""
        return Folder(
            id=data["id"],
            name=data["name"],
            site_id=data["site_id"],
            parent_id=data.get("parent_id"),
            type=FolderType(data.get("type") or FolderType.default()),
            path=data["path"],
            level=data["level"],
            allowed_roles=list(data["allowed_roles"]),
            created_by=data["created_by"],
            created_date=datetime.fromisoformat(data["created_date"]),
            updated_by=data["updated_by"],
            updated_date=datetime.fromisoformat(data["updated_date"]),
            description=data.get("description"),
            sort_order=data.get("sort_order", 0)
        )

    def _to_dict(self, folder: Folder) -> dict:
        """Convert domain entity to database record (transient fields dropped)."""
        return {
            "id": folder.id,
            "name": folder.name,
            "site_id": folder.site_id,
            "parent_id": folder.parent_id,
            "type": folder.type.value,
            "path": folder.path,
            "level": folder.level,
            "allowed_roles": list(folder.allowed_roles),
            "created_by": folder.created_by,
            "created_date": folder.created_date.isoformat(),
            "updated_by": folder.updated_by,
            "updated_date": folder.updated_date.isoformat(),
            "description": folder.description,
            "sort_order": folder.sort_order
        }

    async def get_by_id(self, folder_id: str) -> Optional[Folder]:
        data = await self._db.get_folder(folder_id)
        return self._to_entity(data) if data else None

    async def list_by_site(self, site_id: int) -> List[Folder]:
        records = await self._db.get_all_folders(site_id=site_id)
        return [self._to_entity(record) for record in records]

    async def list_all(self) -> List[Folder]:
        records = await self._db.get_all_folders()
        return [self._to_entity(record) for record in records]

    async def save_changes(
        self,
        upserts: Optional[List[Folder]] = None,
        deletes: Optional[List[str]] = None
    ) -> None:
        upserts = upserts or []
        deletes = deletes or []
        await self._db.commit([self._to_dict(folder) for folder in upserts], list(deletes))
        logger.debug(f"Committed {len(upserts)} upserts and {len(deletes)} deletes")
