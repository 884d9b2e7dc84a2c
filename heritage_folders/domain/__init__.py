"""
Domain layer - Contains business entities and domain logic.
This layer is independent of infrastructure and frameworks.
"""
from .entities import Caller, Folder
from .value_objects import FolderId, FolderType, Role, SiteId

__all__ = [
    "Caller",
    "Folder",
    "FolderId",
    "FolderType",
    "Role",
    "SiteId"
]
