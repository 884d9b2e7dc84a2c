import os

# Configuration is read at import time, so it has to be in place first
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_TYPE"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_TO_FILE"] = "false"
os.environ["HERITAGE_SITE_IDS"] = ""
os.environ["DOCUMENT_CASCADE_POLICY"] = "reassign"
os.environ["CORS_ORIGINS"] = "http://localhost:3000,http://localhost:5173"

from datetime import datetime
from itertools import count

import pytest
from fastapi.testclient import TestClient

from heritage_folders.domain.entities import Caller, Folder
from heritage_folders.domain.value_objects import DEFAULT_ALLOWED_ROLES, FolderType
from heritage_folders.repositories import FolderRepository
from heritage_folders.services.bulk_service import BulkFolderCreator
from heritage_folders.services.collaborators import ConfiguredSiteRegistry, InMemoryDocumentStore
from heritage_folders.services.database import MemoryAdapter
from heritage_folders.services.folder_service import FolderService
from heritage_folders.services.search_service import SearchService
from heritage_folders.services.site_locks import SiteLockRegistry

_ids = count(1)


def make_folder(
    name,
    parent=None,
    site_id=1,
    folder_id=None,
    allowed_roles=None,
    sort_order=0,
    folder_type=FolderType.GENERAL,
    description=None,
    document_count=0
) -> Folder:
    """Build a consistent folder record without going through the service."""
    now = datetime(2024, 1, 1, 12, 0, 0)
    return Folder(
        id=folder_id or f"f{next(_ids)}",
        name=name,
        site_id=site_id,
        parent_id=parent.id if parent else None,
        type=folder_type,
        path=f"{parent.path}/{name}" if parent else f"/{name}",
        level=parent.level + 1 if parent else 0,
        allowed_roles=list(allowed_roles or DEFAULT_ALLOWED_ROLES),
        created_by="system",
        created_date=now,
        updated_by="system",
        updated_date=now,
        description=description,
        sort_order=sort_order,
        document_count=document_count
    )


@pytest.fixture
def db():
    return MemoryAdapter()


@pytest.fixture
def folder_repo(db):
    return FolderRepository(db)


@pytest.fixture
def site_registry():
    return ConfiguredSiteRegistry([1, 2])


@pytest.fixture
def document_store():
    return InMemoryDocumentStore()


@pytest.fixture
def folder_service(folder_repo, site_registry, document_store):
    return FolderService(folder_repo, site_registry, document_store, SiteLockRegistry())


@pytest.fixture
def search_service(folder_repo):
    return SearchService(folder_repo)


@pytest.fixture
def bulk_creator(folder_service):
    return BulkFolderCreator(folder_service)


@pytest.fixture
def manager():
    return Caller(username="alice", role="HERITAGE_MANAGER")


@pytest.fixture
def admin():
    return Caller(username="root", role="SYSTEM_ADMINISTRATOR")


@pytest.fixture
def client():
    from heritage_folders.main import app

    # Entering the context runs startup, which builds a fresh in-memory store
    with TestClient(app) as test_client:
        yield test_client


STAFF_HEADERS = {"X-User-Role": "HERITAGE_MANAGER", "X-User-Name": "alice"}
ADMIN_HEADERS = {"X-User-Role": "SYSTEM_ADMINISTRATOR", "X-User-Name": "root"}
