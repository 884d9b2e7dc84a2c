"""
Mappers between domain entities and DTOs.
Separates domain layer from API layer.
"""
from typing import Dict, List

from ..domain.entities import Folder
from ..domain.value_objects import FOLDER_TYPE_METADATA
from ..services.breadcrumb import BreadcrumbItem
from ..services.bulk_service import BulkResult
from ..services.folder_service import FolderContents
from .dto import (
    BreadcrumbItemDTO,
    BreadcrumbResponseDTO,
    BulkCreateResponseDTO,
    BulkItemFailureDTO,
    FolderContentsDTO,
    FolderDTO,
    FolderListResponseDTO,
    FolderSummaryDTO,
    FolderTreeNodeDTO,
    FolderTreeResponseDTO,
    FolderTypeDTO,
    FolderTypeListResponseDTO,
)


def _folder_fields(folder: Folder) -> Dict:
    return dict(
        id=folder.id,
        name=folder.name,
        description=folder.description,
        type=folder.type.value,
        parent_id=folder.parent_id,
        site_id=folder.site_id,
        path=folder.path,
        level=folder.level,
        sort_order=folder.sort_order,
        allowed_roles=list(folder.allowed_roles),
        document_count=folder.document_count,
        created_by=folder.created_by,
        created_date=folder.created_date.isoformat(),
        updated_by=folder.updated_by,
        updated_date=folder.updated_date.isoformat()
    )


class FolderMapper:
    """Maps between Folder entity and folder DTOs."""

    @staticmethod
    def to_dto(folder: Folder) -> FolderDTO:
        """Convert domain entity to DTO."""
        return FolderDTO(**_folder_fields(folder))

    @staticmethod
    def to_list_response(folders: List[Folder]) -> FolderListResponseDTO:
        return FolderListResponseDTO(
            items=[FolderMapper.to_dto(folder) for folder in folders],
            total=len(folders)
        )

    @staticmethod
    def to_tree_node(folder: Folder) -> FolderTreeNodeDTO:
        """Convert a built tree node, children included."""
        return FolderTreeNodeDTO(
            **_folder_fields(folder),
            children=[FolderMapper.to_tree_node(child) for child in folder.children]
        )

    @staticmethod
    def to_tree_response(tree: List[Folder]) -> FolderTreeResponseDTO:
        return FolderTreeResponseDTO(
            items=[FolderMapper.to_tree_node(root) for root in tree],
            total=len(tree)
        )

    @staticmethod
    def to_contents(contents: FolderContents) -> FolderContentsDTO:
        items = [
            FolderSummaryDTO(
                **_folder_fields(sub),
                child_folder_count=contents.child_counts.get(sub.id, 0)
            )
            for sub in contents.subfolders
        ]
        return FolderContentsDTO(folder=FolderMapper.to_dto(contents.folder), items=items, total=len(items))


class BreadcrumbMapper:

    @staticmethod
    def to_response(items: List[BreadcrumbItem]) -> BreadcrumbResponseDTO:
        return BreadcrumbResponseDTO(
            items=[BreadcrumbItemDTO(id=i.id, name=i.name, type=i.type.value) for i in items],
            total=len(items)
        )


class BulkResultMapper:

    @staticmethod
    def to_response(result: BulkResult) -> BulkCreateResponseDTO:
        return BulkCreateResponseDTO(
            created=result.created,
            skipped=len(result.skipped),
            failed=len(result.failed),
            created_folders=[FolderMapper.to_dto(folder) for folder in result.created_folders],
            skipped_indexes=list(result.skipped),
            errors=[
                BulkItemFailureDTO(index=f.index, name=f.name, error=f.error, message=f.message)
                for f in result.failed
            ]
        )


def folder_types_response() -> FolderTypeListResponseDTO:
    items = [
        FolderTypeDTO(value=folder_type.value, **meta)
        for folder_type, meta in FOLDER_TYPE_METADATA.items()
    ]
    return FolderTypeListResponseDTO(items=items, total=len(items))
