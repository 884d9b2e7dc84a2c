"""
Search Service - Substring search and field filtering over folders.

Results are flat, permission-filtered lists. A missing role is searched
as an anonymous (PUBLIC) caller.
"""
from typing import List, Optional

from .permissions import filter_visible
from ..core.logging_config import get_logger
from ..domain.entities import Folder
from ..domain.value_objects import MIN_SEARCH_QUERY_LENGTH
from ..repositories.interfaces import IFolderRepository

logger = get_logger(__name__)


class SearchService:
    """
    Service for folder search operations.
    Matches on name and description, case-insensitively.
    """

    def __init__(self, folder_repo: IFolderRepository):
        """
        Initialize search service.

        Args:
            folder_repo: Folder repository instance
        """
        self.folder_repo = folder_repo

    async def _candidates(self, site_id: Optional[int]) -> List[Folder]:
        if site_id is None:
            return await self.folder_repo.list_all()
        return await self.folder_repo.list_by_site(site_id)

    async def search_folders(
        self,
        site_id: Optional[int],
        query: Optional[str],
        role: Optional[str] = None
    ) -> List[Folder]:
        """
        Find folders whose name or description contains the query.

        Args:
            site_id: Restrict to one heritage site (None searches every site)
            query: Search text; trimmed before matching
            role: Caller role used for permission filtering

        Returns:
            Matching folders ordered by name, or [] for queries shorter
            than two characters
        """
        needle = (query or "").strip().lower()
        if len(needle) < MIN_SEARCH_QUERY_LENGTH:
            logger.debug(f"Search query '{query}' too short; returning no results")
            return []

        matches = [
            folder for folder in await self._candidates(site_id)
            if needle in folder.name.lower() or needle in (folder.description or "").lower()
        ]
        results = filter_visible(matches, role)
        results.sort(key=lambda f: f.name.lower())

        logger.info(f"Search '{needle}' in site {site_id}: {len(results)} results")
        return results

    async def filter_folders(
        self,
        site_id: Optional[int],
        name: Optional[str] = None,
        parent_id: Optional[str] = None,
        created_by: Optional[str] = None,
        role: Optional[str] = None
    ) -> List[Folder]:
        """
        Filter folders by field.

        ``name`` matches as a case-insensitive substring, ``parent_id`` and
        ``created_by`` must match exactly. Filters left as None are ignored.
        """
        folders = await self._candidates(site_id)

        if name and name.strip():
            needle = name.strip().lower()
            folders = [f for f in folders if needle in f.name.lower()]
        if parent_id is not None:
            folders = [f for f in folders if f.parent_id == parent_id]
        if created_by is not None:
            folders = [f for f in folders if f.created_by == created_by]

        results = filter_visible(folders, role)
        results.sort(key=lambda f: f.name.lower())
        return results
