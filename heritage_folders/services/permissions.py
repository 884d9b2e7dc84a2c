"""
Permission Evaluator - decides what a caller role may see and change.

Visibility is judged per folder from its own ``allowed_roles``; nothing is
inherited from the parent.
"""
from typing import Iterable, List, Optional

from ..api.exceptions import PermissionDenied
from ..domain.entities import Folder
from ..domain.value_objects import PRIVILEGED_ROLES, STAFF_ROLES, Role


def _normalize(role: Optional[str]) -> str:
    return role.strip().upper() if role and role.strip() else Role.PUBLIC.value


def is_visible(folder: Folder, role: Optional[str]) -> bool:
    """True when the folder is public or lists the caller's role."""
    allowed = folder.allowed_roles
    return Role.PUBLIC.value in allowed or _normalize(role) in allowed


def can_mutate(folder: Folder, role: Optional[str]) -> bool:
    """Any role that can see a folder may change it."""
    return is_visible(folder, role)


def ensure_can_mutate(folder: Folder, role: Optional[str]) -> None:
    if not can_mutate(folder, role):
        raise PermissionDenied(f"Role {_normalize(role)} may not modify folder '{folder.name}'")


def filter_visible(folders: Iterable[Folder], role: Optional[str]) -> List[Folder]:
    """Drop the folders the caller cannot see. Run before building trees."""
    return [folder for folder in folders if is_visible(folder, role)]


def is_staff(role: Optional[str]) -> bool:
    """Roles allowed to call mutating endpoints at all."""
    return _normalize(role) in STAFF_ROLES


def is_privileged(role: Optional[str]) -> bool:
    """Roles allowed to see system-wide views."""
    return _normalize(role) in PRIVILEGED_ROLES
