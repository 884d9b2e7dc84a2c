"""
Folders Router - Handles folder hierarchy operations.

This router is responsible for:
- Trees, flat lists, search and field filters (permission-filtered)
- Creating, updating, moving and deleting folders (staff roles)
- Breadcrumbs, contents and statistics for a single folder
- Reference data: folder types and role tokens

Architecture:
- Router handles HTTP request/response only
- Business logic delegated to FolderService, SearchService and BulkFolderCreator
- Engine errors propagate to the gateway's exception handler

Example Usage:
    GET  /api/folders/tree?siteId=1
    POST /api/folders/site/1            {"name": "Archives"}
    POST /api/folders/{id}/move         {"parentId": null}
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from .dependencies import (
    get_bulk_creator,
    get_caller,
    get_folder_service,
    get_search_service,
    require_privileged,
    require_staff,
)
from ..api.dto import (
    BreadcrumbResponseDTO,
    BulkCreateRequestDTO,
    BulkCreateResponseDTO,
    FolderContentsDTO,
    FolderCreateRequestDTO,
    FolderDTO,
    FolderListResponseDTO,
    FolderMoveRequestDTO,
    FolderPermissionsRequestDTO,
    FolderStatisticsDTO,
    FolderTreeResponseDTO,
    FolderTypeListResponseDTO,
    FolderUpdateRequestDTO,
    RoleListResponseDTO,
    TreeStatisticsDTO,
)
from ..api.exceptions import PermissionDenied
from ..api.mappers import BreadcrumbMapper, BulkResultMapper, FolderMapper, folder_types_response
from ..core.logging_config import get_logger
from ..domain.entities import Caller
from ..domain.value_objects import ALL_ROLES
from ..middleware.rate_limit import rate_limit_bulk
from ..services.permissions import is_privileged

logger = get_logger(__name__)

# Create router instance for this module
router = APIRouter(prefix="/folders", tags=["folders"])


def _ensure_site_scope(site_id: Optional[int], caller: Caller) -> None:
    """Views spanning every site are for administrators only."""
    if site_id is None and not is_privileged(caller.role):
        raise PermissionDenied("siteId is required unless you are a system administrator")


# Collection-level routes come before /{folder_id} so they are not captured by it

@router.get("/tree", response_model=FolderTreeResponseDTO)
async def get_folder_tree(
    site_id: Optional[int] = Query(None, alias="siteId"),
    caller: Caller = Depends(get_caller)
):
    """
    Get the permission-filtered folder tree.

    Folders the caller cannot see are left out; their visible children
    surface as roots. Without siteId the tree spans every site (administrators only).
    """
    _ensure_site_scope(site_id, caller)
    tree = await get_folder_service().get_tree(site_id, caller)
    return FolderMapper.to_tree_response(tree)


@router.get("/search", response_model=FolderListResponseDTO)
async def search_folders(
    q: Optional[str] = Query(None, description="Substring matched against name and description"),
    site_id: Optional[int] = Query(None, alias="siteId"),
    caller: Caller = Depends(get_caller)
):
    """
    Search folders by name or description.
    Queries shorter than two characters return an empty list.
    """
    results = await get_search_service().search_folders(site_id, q, caller.role)
    return FolderMapper.to_list_response(results)


@router.get("/filter", response_model=FolderListResponseDTO)
async def filter_folders(
    site_id: Optional[int] = Query(None, alias="siteId"),
    name: Optional[str] = None,
    parent_id: Optional[str] = Query(None, alias="parentId"),
    created_by: Optional[str] = Query(None, alias="createdBy"),
    caller: Caller = Depends(get_caller)
):
    """Filter folders by name substring, parent or creator."""
    _ensure_site_scope(site_id, caller)
    results = await get_search_service().filter_folders(
        site_id, name=name, parent_id=parent_id, created_by=created_by, role=caller.role
    )
    return FolderMapper.to_list_response(results)


@router.get("/types", response_model=FolderTypeListResponseDTO)
async def get_folder_types():
    """Folder types with display name, icon and color."""
    return folder_types_response()


@router.get("/permissions", response_model=RoleListResponseDTO)
async def get_role_tokens():
    """Role tokens accepted in allowedRoles."""
    return RoleListResponseDTO(items=ALL_ROLES, total=len(ALL_ROLES))


@router.get("/statistics", response_model=TreeStatisticsDTO)
async def get_tree_statistics(
    site_id: Optional[int] = Query(None, alias="siteId"),
    caller: Caller = Depends(get_caller)
):
    """Folder and document totals, deepest nesting and per-type counts."""
    _ensure_site_scope(site_id, caller)
    stats = await get_folder_service().get_tree_statistics(site_id, caller)
    return TreeStatisticsDTO(**stats)


@router.get("/site/{site_id}", response_model=FolderListResponseDTO)
async def get_site_folders(site_id: int, caller: Caller = Depends(get_caller)):
    """Flat list of the folders of one heritage site."""
    folders = await get_folder_service().list_site_folders(site_id, caller)
    return FolderMapper.to_list_response(folders)


@router.post("/site/{site_id}", response_model=FolderDTO, status_code=status.HTTP_201_CREATED)
async def create_folder(
    site_id: int,
    body: FolderCreateRequestDTO,
    caller: Caller = Depends(require_staff)
):
    """
    Create a folder in a heritage site.

    Status Codes:
        201: Created
        400: Invalid name, description, type or roles
        404: Unknown site or parent
        409: A sibling already has this name
    """
    folder = await get_folder_service().create_folder(site_id, body.model_dump(), caller)
    return FolderMapper.to_dto(folder)


@router.post("/site/{site_id}/bulk", response_model=BulkCreateResponseDTO)
@rate_limit_bulk
async def bulk_create_folders(
    request: Request,
    site_id: int,
    body: BulkCreateRequestDTO,
    caller: Caller = Depends(require_staff)
):
    """
    Create many folders in order. Blank names are skipped and failing
    items are reported without stopping the batch.
    """
    specs = [item.model_dump() for item in body.folders]
    result = await get_bulk_creator().bulk_create(site_id, specs, caller)
    return BulkResultMapper.to_response(result)


@router.get("", response_model=FolderListResponseDTO)
async def get_all_folders(caller: Caller = Depends(require_privileged)):
    """Flat list of every folder across all sites."""
    folders = await get_folder_service().list_all_folders(caller)
    return FolderMapper.to_list_response(folders)


# Single-folder routes

@router.get("/{folder_id}", response_model=FolderDTO)
async def get_folder(folder_id: str, caller: Caller = Depends(get_caller)):
    """
    Get a single folder.

    Status Codes:
        200: Success
        403: Folder hidden from the caller's role
        404: Folder not found
    """
    folder = await get_folder_service().get_folder(folder_id, caller)
    return FolderMapper.to_dto(folder)


@router.get("/{folder_id}/children", response_model=FolderListResponseDTO)
async def get_folder_children(folder_id: str, caller: Caller = Depends(get_caller)):
    children = await get_folder_service().get_children(folder_id, caller)
    return FolderMapper.to_list_response(children)


@router.get("/{folder_id}/path", response_model=BreadcrumbResponseDTO)
async def get_folder_path(folder_id: str, caller: Caller = Depends(get_caller)):
    """Breadcrumb from the root down to the folder; empty when it is missing or hidden."""
    items = await get_folder_service().get_breadcrumb(folder_id, caller)
    return BreadcrumbMapper.to_response(items)


@router.get("/{folder_id}/contents", response_model=FolderContentsDTO)
async def get_folder_contents(folder_id: str, caller: Caller = Depends(get_caller)):
    contents = await get_folder_service().get_folder_contents(folder_id, caller)
    return FolderMapper.to_contents(contents)


@router.get("/{folder_id}/statistics", response_model=FolderStatisticsDTO)
async def get_folder_statistics(folder_id: str, caller: Caller = Depends(get_caller)):
    stats = await get_folder_service().get_folder_statistics(folder_id, caller)
    return FolderStatisticsDTO(**stats)


@router.put("/{folder_id}", response_model=FolderDTO)
async def update_folder(
    folder_id: str,
    body: FolderUpdateRequestDTO,
    caller: Caller = Depends(require_staff)
):
    """Update name, description, type or sort order. Omitted fields are left alone."""
    folder = await get_folder_service().update_folder(folder_id, body.model_dump(exclude_unset=True), caller)
    return FolderMapper.to_dto(folder)


@router.patch("/{folder_id}/permissions", response_model=FolderDTO)
async def update_folder_permissions(
    folder_id: str,
    body: FolderPermissionsRequestDTO,
    caller: Caller = Depends(require_staff)
):
    folder = await get_folder_service().update_folder_permissions(folder_id, body.allowed_roles, caller)
    return FolderMapper.to_dto(folder)


@router.post("/{folder_id}/move", response_model=FolderDTO)
async def move_folder(
    folder_id: str,
    body: FolderMoveRequestDTO,
    caller: Caller = Depends(require_staff)
):
    """
    Move a folder under a new parent, or to the root level with a null parentId.

    Status Codes:
        200: Moved (or already there)
        400: The move would create a cycle
        404: Folder or destination not found
        409: The destination already has a folder with this name
    """
    folder = await get_folder_service().move_folder(folder_id, body.parent_id, caller)
    return FolderMapper.to_dto(folder)


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(
    folder_id: str,
    recursive: bool = False,
    caller: Caller = Depends(require_staff)
):
    """
    Delete a folder. Folders with subfolders need recursive=true.

    Status Codes:
        204: Deleted
        404: Folder not found
        409: Folder has subfolders (non-recursive) or the document store refuses
    """
    deleted = await get_folder_service().delete_folder(folder_id, recursive=recursive, caller=caller)
    logger.debug(f"DELETE {folder_id} removed {len(deleted)} folders")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
