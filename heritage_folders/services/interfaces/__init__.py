"""
Service Interfaces Module - Define contracts for business logic services
and the external collaborators they consume.
"""
from .icollaborators import IDocumentStore, ISiteRegistry
from .ifolder_service import IFolderService

__all__ = [
    "IDocumentStore",
    "IFolderService",
    "ISiteRegistry",
]
