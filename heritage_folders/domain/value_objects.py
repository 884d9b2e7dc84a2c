"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from enum import Enum
from typing import NewType

# Value objects for type safety and domain clarity
FolderId = NewType("FolderId", str)
SiteId = NewType("SiteId", int)

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MIN_SEARCH_QUERY_LENGTH = 2

SYSTEM_USER = "system"


class FolderType(str, Enum):
    """Descriptive folder categories. They carry no engine behavior."""
    GENERAL = "GENERAL"
    HISTORICAL = "HISTORICAL"
    ARCHAEOLOGICAL = "ARCHAEOLOGICAL"
    ARCHITECTURAL = "ARCHITECTURAL"
    CONSERVATION = "CONSERVATION"
    RESEARCH = "RESEARCH"
    LEGAL = "LEGAL"
    ADMINISTRATIVE = "ADMINISTRATIVE"
    MEDIA_COVERAGE = "MEDIA_COVERAGE"
    PHOTOGRAPHS = "PHOTOGRAPHS"
    MAPS = "MAPS"
    REPORTS = "REPORTS"

    @classmethod
    def default(cls) -> "FolderType":
        return cls.GENERAL


# Display metadata served by GET /api/folders/types
FOLDER_TYPE_METADATA = {
    FolderType.GENERAL: {"name": "General", "icon": "Folder", "color": "blue"},
    FolderType.HISTORICAL: {"name": "Historical Records", "icon": "Archive", "color": "amber"},
    FolderType.ARCHAEOLOGICAL: {"name": "Archaeological", "icon": "Pickaxe", "color": "orange"},
    FolderType.ARCHITECTURAL: {"name": "Architectural Plans", "icon": "Building", "color": "purple"},
    FolderType.CONSERVATION: {"name": "Conservation", "icon": "Wrench", "color": "green"},
    FolderType.RESEARCH: {"name": "Research Papers", "icon": "BookOpen", "color": "indigo"},
    FolderType.LEGAL: {"name": "Legal Documents", "icon": "Scale", "color": "red"},
    FolderType.ADMINISTRATIVE: {"name": "Administrative", "icon": "Briefcase", "color": "gray"},
    FolderType.MEDIA_COVERAGE: {"name": "Media Coverage", "icon": "Newspaper", "color": "pink"},
    FolderType.PHOTOGRAPHS: {"name": "Photographs", "icon": "Camera", "color": "cyan"},
    FolderType.MAPS: {"name": "Maps & Surveys", "icon": "Map", "color": "emerald"},
    FolderType.REPORTS: {"name": "Reports", "icon": "FileText", "color": "slate"},
}


class Role(str, Enum):
    """Role tokens accepted in a folder's allowed roles."""
    SYSTEM_ADMINISTRATOR = "SYSTEM_ADMINISTRATOR"
    HERITAGE_MANAGER = "HERITAGE_MANAGER"
    CONTENT_MANAGER = "CONTENT_MANAGER"
    COMMUNITY_MEMBER = "COMMUNITY_MEMBER"
    PUBLIC = "PUBLIC"


ALL_ROLES = [role.value for role in Role]

# Roles given to a folder created without an explicit list
DEFAULT_ALLOWED_ROLES = [
    Role.SYSTEM_ADMINISTRATOR.value,
    Role.HERITAGE_MANAGER.value,
    Role.CONTENT_MANAGER.value,
    Role.COMMUNITY_MEMBER.value,
]

# Broader authorization tier for mutating endpoints
STAFF_ROLES = frozenset({
    Role.SYSTEM_ADMINISTRATOR.value,
    Role.HERITAGE_MANAGER.value,
    Role.CONTENT_MANAGER.value,
})

# Roles allowed to see system-wide (all sites) views
PRIVILEGED_ROLES = frozenset({Role.SYSTEM_ADMINISTRATOR.value})
