"""
Shared dependencies for routers.
Provides database and service initialization, plus caller identity.

Services are module globals built once on startup and handed to request
handlers through the get_* functions.
"""
from pathlib import Path
from typing import Optional

from fastapi import Depends, Header

from ..api.exceptions import PermissionDenied
from ..core.config import DATABASE_TYPE, DOCUMENT_CASCADE_POLICY, HERITAGE_SITE_IDS, JSON_DB_PATH
from ..core.logging_config import get_logger
from ..domain.entities import Caller
from ..repositories import FolderRepository
from ..services.bulk_service import BulkFolderCreator
from ..services.collaborators import ConfiguredSiteRegistry, InMemoryDocumentStore
from ..services.database import DatabaseFactory
from ..services.folder_service import FolderService
from ..services.permissions import is_privileged, is_staff
from ..services.search_service import SearchService
from ..services.site_locks import SiteLockRegistry

logger = get_logger(__name__)

# Global services (initialized on startup)
db_service = None
site_registry = None
document_store = None
folder_service = None
search_service = None
bulk_creator = None


async def initialize_database():
    """Initialize database adapter based on configuration."""
    global db_service

    logger.info(f"Initializing database: {DATABASE_TYPE}")

    if DATABASE_TYPE.lower() == "json":
        data_dir = Path(JSON_DB_PATH) if JSON_DB_PATH else None
        logger.info("  -> Database Type: JSON (file-based)")
        logger.debug(f"  -> Database Path: {data_dir}")
        db_service = await DatabaseFactory.create_and_initialize("json", data_dir=data_dir)
    elif DATABASE_TYPE.lower() == "memory":
        logger.info("  -> Database Type: Memory (in-memory, non-persistent)")
        db_service = await DatabaseFactory.create_and_initialize("memory")
    else:
        raise ValueError(f"Unsupported DATABASE_TYPE: {DATABASE_TYPE}. Supported types: 'json', 'memory'")

    logger.info("Database initialized")


async def initialize_services():
    """
    Initialize all services after the database is ready.

    Sets up the collaborators (site registry, document store), the folder
    service, search and bulk creation. All writers share one lock registry.
    """
    global site_registry, document_store, folder_service, search_service, bulk_creator

    if db_service is None:
        await initialize_database()

    logger.info("Initializing services...")

    site_registry = ConfiguredSiteRegistry(HERITAGE_SITE_IDS)
    if HERITAGE_SITE_IDS:
        logger.info(f"  -> Heritage sites: {HERITAGE_SITE_IDS}")
    else:
        logger.info("  -> Heritage sites: any (HERITAGE_SITE_IDS not set)")

    document_store = InMemoryDocumentStore(policy=DOCUMENT_CASCADE_POLICY)
    logger.info(f"  -> Document cascade policy: {DOCUMENT_CASCADE_POLICY}")

    folder_repo = FolderRepository(db_service)
    folder_service = FolderService(folder_repo, site_registry, document_store, SiteLockRegistry())
    search_service = SearchService(folder_repo)
    bulk_creator = BulkFolderCreator(folder_service)

    logger.info("All services initialized")


async def shutdown_services():
    """Close the database and drop service references."""
    global db_service, site_registry, document_store, folder_service, search_service, bulk_creator

    if db_service is not None:
        await db_service.close()
    db_service = site_registry = document_store = None
    folder_service = search_service = bulk_creator = None


def get_db_service():
    """Get database service (dependency injection)."""
    if db_service is None:
        raise RuntimeError("Database service not initialized")
    return db_service


def get_folder_service() -> FolderService:
    """Get folder service (dependency injection)."""
    if folder_service is None:
        raise RuntimeError("Folder service not initialized")
    return folder_service


def get_search_service() -> SearchService:
    """Get search service (dependency injection)."""
    if search_service is None:
        raise RuntimeError("Search service not initialized")
    return search_service


def get_bulk_creator() -> BulkFolderCreator:
    """Get bulk creation orchestrator (dependency injection)."""
    if bulk_creator is None:
        raise RuntimeError("Bulk creator not initialized")
    return bulk_creator


def get_document_store() -> InMemoryDocumentStore:
    """Get document store (dependency injection)."""
    if document_store is None:
        raise RuntimeError("Document store not initialized")
    return document_store


def get_caller(
    x_user_role: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None)
) -> Caller:
    """
    Caller identity from the identity provider's headers.
    No role header means an anonymous PUBLIC caller.
    """
    role = x_user_role.strip().upper() if x_user_role and x_user_role.strip() else None
    username = x_user_name.strip() if x_user_name and x_user_name.strip() else None
    return Caller(username=username, role=role)


def require_staff(caller: Caller = Depends(get_caller)) -> Caller:
    """Mutating endpoints are limited to staff roles."""
    if not is_staff(caller.role):
        raise PermissionDenied(f"Role {caller.effective_role} may not modify folders")
    return caller


def require_privileged(caller: Caller = Depends(get_caller)) -> Caller:
    """System-wide views are limited to administrators."""
    if not is_privileged(caller.role):
        raise PermissionDenied(f"Role {caller.effective_role} may not view folders across all sites")
    return caller
