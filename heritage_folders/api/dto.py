"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.

Field names travel as camelCase on the wire; Python code uses snake_case.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base DTO that reads and writes camelCase aliases."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class FolderCreateRequestDTO(CamelModel):
    """Request body for creating a folder."""
    name: str
    description: Optional[str] = None
    type: Optional[str] = None
    parent_id: Optional[str] = None
    sort_order: int = 0
    allowed_roles: Optional[List[str]] = None


class BulkFolderItemDTO(FolderCreateRequestDTO):
    """One bulk item. Blank or missing names are skipped, not rejected."""
    name: Optional[str] = None


class BulkCreateRequestDTO(CamelModel):
    folders: List[BulkFolderItemDTO]


class FolderUpdateRequestDTO(CamelModel):
    """Request body for updating a folder. Only the supplied fields change."""
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    sort_order: Optional[int] = None


class FolderPermissionsRequestDTO(CamelModel):
    allowed_roles: List[str]


class FolderMoveRequestDTO(CamelModel):
    """Request body for moving a folder. A null parent moves it to the root level."""
    parent_id: Optional[str] = None


class FolderDTO(CamelModel):
    """Folder DTO for API responses."""
    id: str
    name: str
    description: Optional[str] = None
    type: str
    parent_id: Optional[str] = None
    site_id: int
    path: str
    level: int
    sort_order: int = 0
    allowed_roles: List[str]
    document_count: int = 0
    created_by: str
    created_date: str
    updated_by: str
    updated_date: str


class FolderTreeNodeDTO(FolderDTO):
    """Folder with its nested children."""
    children: List["FolderTreeNodeDTO"] = []


FolderTreeNodeDTO.model_rebuild()


class FolderSummaryDTO(FolderDTO):
    """Folder listed inside another folder's contents."""
    child_folder_count: int = 0


class FolderListResponseDTO(CamelModel):
    items: List[FolderDTO]
    total: int


class FolderTreeResponseDTO(CamelModel):
    items: List[FolderTreeNodeDTO]
    total: int


class BreadcrumbItemDTO(CamelModel):
    id: str
    name: str
    type: str


class BreadcrumbResponseDTO(CamelModel):
    items: List[BreadcrumbItemDTO]
    total: int


class FolderContentsDTO(CamelModel):
    """A folder and its direct subfolders."""
    folder: FolderDTO
    items: List[FolderSummaryDTO]
    total: int


class FolderStatisticsDTO(CamelModel):
    document_count: int
    child_folder_count: int


class TreeStatisticsDTO(CamelModel):
    total_folders: int
    total_documents: int
    max_depth: int
    folders_by_type: Dict[str, int]


class BulkItemFailureDTO(CamelModel):
    index: int
    name: Optional[str] = None
    error: str
    message: str


class BulkCreateResponseDTO(CamelModel):
    """Response DTO for bulk creation."""
    created: int
    skipped: int
    failed: int
    created_folders: List[FolderDTO]
    skipped_indexes: List[int]
    errors: List[BulkItemFailureDTO]


class FolderTypeDTO(CamelModel):
    value: str
    name: str
    icon: str
    color: str


class FolderTypeListResponseDTO(CamelModel):
    items: List[FolderTypeDTO]
    total: int


class RoleListResponseDTO(CamelModel):
    items: List[str]
    total: int


class ErrorResponseDTO(BaseModel):
    """Error response DTO."""
    error: str
    message: str
    status_code: int
    path: Optional[str] = None
    request_id: Optional[str] = None
