"""
Validation utilities - Pure validation functions.

Every check runs against the folder records handed in by the caller; the
folder service reads those from the store inside the site write lock.
"""
import re
from typing import Dict, Iterable, List, Optional, Union

from ..api.exceptions import CycleError, DuplicateNameError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..domain.entities import Folder
from ..domain.value_objects import (
    ALL_ROLES,
    MAX_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    FolderType,
)

logger = get_logger(__name__)

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9 \-_&()\[\]]+$")


def validate_name(
    name: Optional[str],
    siblings: Iterable[Folder],
    exclude_id: Optional[str] = None
) -> str:
    """
    Validate a folder name against its would-be siblings.

    Returns:
        The trimmed name

    Raises:
        ValidationError: If the name is empty, too long or has illegal characters
        DuplicateNameError: If a sibling already uses the name (case-insensitive)
    """
    if name is None or not name.strip():
        raise ValidationError("Folder name is required")

    trimmed = name.strip()
    if len(trimmed) > MAX_NAME_LENGTH:
        raise ValidationError(f"Folder name cannot exceed {MAX_NAME_LENGTH} characters")

    if not _NAME_PATTERN.match(trimmed):
        raise ValidationError(
            "Folder name may only contain letters, digits, spaces and - _ & ( ) [ ]"
        )

    wanted = trimmed.lower()
    for sibling in siblings:
        if sibling.id != exclude_id and sibling.name_key() == wanted:
            raise DuplicateNameError(f"A folder named '{trimmed}' already exists here")

    return trimmed


def validate_description(description: Optional[str]) -> Optional[str]:
    """Validate and trim a folder description."""
    if description is None:
        return None
    trimmed = description.strip()
    if len(trimmed) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
        )
    return trimmed


def validate_folder_type(value: Union[FolderType, str, None]) -> FolderType:
    """Resolve a folder type, defaulting to GENERAL."""
    if value is None:
        return FolderType.default()
    if isinstance(value, FolderType):
        return value
    try:
        return FolderType(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Invalid folder type: {value}")


def validate_allowed_roles(roles: Optional[Iterable[str]]) -> List[str]:
    """
    Validate a replacement role list.

    Returns:
        Normalized role tokens, duplicates removed, order kept
    """
    if roles is None:
        raise ValidationError("Allowed roles are required")

    normalized: List[str] = []
    for role in roles:
        token = str(role).strip().upper()
        if token not in ALL_ROLES:
            raise ValidationError(f"Unknown role: {role}")
        if token not in normalized:
            normalized.append(token)

    if not normalized:
        raise ValidationError("A folder must allow at least one role")
    return normalized


def validate_move(
    folder_id: str,
    new_parent_id: Optional[str],
    all_folders: Iterable[Folder]
) -> Optional[Folder]:
    """
    Check that moving ``folder_id`` under ``new_parent_id`` keeps the forest acyclic.

    Returns:
        The resolved new parent, or None for a move to root

    Raises:
        NotFoundError: If the folder or new parent is unknown, or the parent
            belongs to another site
        CycleError: If the new parent is the folder itself or one of its descendants
    """
    by_id: Dict[str, Folder] = {folder.id: folder for folder in all_folders}

    folder = by_id.get(folder_id)
    if folder is None:
        raise NotFoundError(f"Folder {folder_id} not found")

    if new_parent_id is None:
        return None

    if new_parent_id == folder_id:
        raise CycleError("A folder cannot be moved into itself")

    new_parent = by_id.get(new_parent_id)
    if new_parent is None or new_parent.site_id != folder.site_id:
        raise NotFoundError(f"Destination folder {new_parent_id} not found")

    # Walk up from the destination; meeting the moved folder means a cycle
    seen = set()
    current: Optional[Folder] = new_parent
    while current is not None:
        if current.id == folder_id:
            raise CycleError("Cannot move a folder into one of its own descendants")
        if current.id in seen:
            logger.warning(f"Ancestor chain of folder {new_parent_id} loops at {current.id}")
            break
        seen.add(current.id)
        current = by_id.get(current.parent_id) if current.parent_id else None

    return new_parent
