"""
Domain entities - Core business objects.
These represent the business concepts, not database models.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from .value_objects import FolderId, FolderType, SiteId, Role


@dataclass
class Folder:
    """
    Folder entity - a named, typed node in a per-site folder forest.

    ``children`` and ``document_count`` are transient: the tree builder and
    the document store fill them on copies, the store never persists them.
    """
    id: FolderId
    name: str
    site_id: SiteId
    parent_id: Optional[FolderId]
    type: FolderType
    path: str
    level: int
    allowed_roles: List[str]
    created_by: str
    created_date: datetime
    updated_by: str
    updated_date: datetime
    description: Optional[str] = None
    sort_order: int = 0
    document_count: int = 0
    children: List["Folder"] = field(default_factory=list)

    def sort_key(self) -> Tuple[int, str]:
        """Sibling display order: sort order first, then name."""
        return (self.sort_order, self.name.lower())

    def name_key(self) -> str:
        return self.name.strip().lower()


@dataclass
class Caller:
    """
    Identity of whoever triggers an operation, as supplied by the
    identity provider. A missing role means an anonymous caller.
    """
    username: Optional[str] = None
    role: Optional[str] = None

    @property
    def effective_role(self) -> str:
        return self.role or Role.PUBLIC.value
