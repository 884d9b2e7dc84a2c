"""
Folder Service - Business logic for folder operations.

Every mutation reads the current persisted state of the folder's site,
validates against it, and writes its result with a single store commit,
all while holding that site's write lock. A failed check leaves the store
untouched.

Methods take an optional ``caller``. Without one the operation runs in
system context: no permission filtering, audit user ``"system"``.
"""
import uuid
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .breadcrumb import BreadcrumbItem, get_breadcrumb
from .interfaces import IDocumentStore, IFolderService, ISiteRegistry
from .permissions import ensure_can_mutate, filter_visible, is_visible
from .site_locks import SiteLockRegistry
from .tree_builder import build_tree, tree_statistics
from ..api.exceptions import NotEmptyError, NotFoundError, PermissionDenied, ValidationError
from ..core.logging_config import get_logger
from ..domain.entities import Caller, Folder
from ..domain.value_objects import DEFAULT_ALLOWED_ROLES, SYSTEM_USER
from ..repositories.interfaces import IFolderRepository
from ..utils.validators import (
    validate_allowed_roles,
    validate_description,
    validate_folder_type,
    validate_move,
    validate_name,
)

logger = get_logger(__name__)


@dataclass
class FolderContents:
    """Direct subfolders of a folder, with their own child counts."""
    folder: Folder
    subfolders: List[Folder] = field(default_factory=list)
    child_counts: Dict[str, int] = field(default_factory=dict)


def _child_path(parent: Optional[Folder], name: str) -> str:
    return f"{parent.path}/{name}" if parent else f"/{name}"


def _children_index(folders: List[Folder]) -> Dict[Optional[str], List[Folder]]:
    index: Dict[Optional[str], List[Folder]] = defaultdict(list)
    for folder in folders:
        index[folder.parent_id].append(folder)
    return index


def _descendants(folder_id: str, folders: List[Folder]) -> List[Folder]:
    """Every folder below ``folder_id``, breadth first."""
    index = _children_index(folders)
    found: List[Folder] = []
    seen = {folder_id}
    queue = deque([folder_id])
    while queue:
        current = queue.popleft()
        for child in index.get(current, []):
            if child.id in seen:
                continue
            seen.add(child.id)
            found.append(child)
            queue.append(child.id)
    return found


def _relocate_subtree(folder: Folder, parent: Optional[Folder], folders: List[Folder]) -> List[Folder]:
    """
    Recompute level and path for ``folder`` and all of its descendants.

    ``folder`` must already carry its new parent id and name. Returns the
    folder followed by every descendant whose derived fields were rewritten.
    """
    folder.level = parent.level + 1 if parent else 0
    folder.path = _child_path(parent, folder.name)

    index = _children_index(folders)
    changed = [folder]
    seen = {folder.id}
    queue = deque([folder])
    while queue:
        current = queue.popleft()
        for child in index.get(current.id, []):
            if child.id in seen:
                continue
            seen.add(child.id)
            child.level = current.level + 1
            child.path = _child_path(current, child.name)
            changed.append(child)
            queue.append(child)
    return changed


class FolderService(IFolderService):
    """
    Service for folder business logic.
    Handles creation, updates, moves, deletion and the permission-filtered reads.
    """

    def __init__(
        self,
        folder_repo: IFolderRepository,
        site_registry: ISiteRegistry,
        document_store: IDocumentStore,
        site_locks: Optional[SiteLockRegistry] = None
    ):
        """
        Initialize folder service.

        Args:
            folder_repo: Folder repository (dependency injection)
            site_registry: Heritage site registry
            document_store: Document store for counts and deletion events
            site_locks: Per-site write locks (shared with other writers)
        """
        self._repo = folder_repo
        self._sites = site_registry
        self._documents = document_store
        self._locks = site_locks or SiteLockRegistry()

    @staticmethod
    def _audit_user(caller: Optional[Caller]) -> str:
        if caller and caller.username:
            return caller.username
        return SYSTEM_USER

    @staticmethod
    def _check_mutate(folder: Folder, caller: Optional[Caller]) -> None:
        if caller is not None:
            ensure_can_mutate(folder, caller.effective_role)

    @staticmethod
    def _visible(folders: List[Folder], caller: Optional[Caller]) -> List[Folder]:
        if caller is None:
            return folders
        return filter_visible(folders, caller.effective_role)

    def _stamp(self, folder: Folder, caller: Optional[Caller]) -> None:
        folder.updated_by = self._audit_user(caller)
        folder.updated_date = datetime.now()

    async def _attach_document_counts(self, folders: List[Folder]) -> List[Folder]:
        if folders:
            counts = await self._documents.count_documents([f.id for f in folders])
            for folder in folders:
                folder.document_count = counts.get(folder.id, 0)
        return folders

    async def _site_of(self, folder_id: str) -> int:
        folder = await self._repo.get_by_id(folder_id)
        if folder is None:
            raise NotFoundError(f"Folder {folder_id} not found")
        return folder.site_id

    @staticmethod
    def _find(folders: List[Folder], folder_id: str) -> Folder:
        for folder in folders:
            if folder.id == folder_id:
                return folder
        # Removed by a writer that held the lock before us
        raise NotFoundError(f"Folder {folder_id} not found")

    # Mutations

    async def create_folder(self, site_id: int, data: Dict[str, Any], caller: Optional[Caller] = None) -> Folder:
        if not await self._sites.site_exists(site_id):
            raise NotFoundError(f"Heritage site {site_id} not found")

        async with self._locks.hold(site_id):
            folders = await self._repo.list_by_site(site_id)

            parent_id = data.get("parent_id")
            parent = None
            if parent_id is not None:
                parent = next((f for f in folders if f.id == parent_id), None)
                if parent is None or (caller is not None and not is_visible(parent, caller.effective_role)):
                    raise NotFoundError(f"Parent folder {parent_id} not found in site {site_id}")

            siblings = [f for f in folders if f.parent_id == parent_id]
            name = validate_name(data.get("name"), siblings)
            description = validate_description(data.get("description"))
            folder_type = validate_folder_type(data.get("type"))
            roles = data.get("allowed_roles")
            allowed_roles = validate_allowed_roles(roles) if roles else list(DEFAULT_ALLOWED_ROLES)

            now = datetime.now()
            user = self._audit_user(caller)
            folder = Folder(
                id=str(uuid.uuid4()),
                name=name,
                site_id=site_id,
                parent_id=parent_id,
                type=folder_type,
                path=_child_path(parent, name),
                level=parent.level + 1 if parent else 0,
                allowed_roles=allowed_roles,
                created_by=user,
                created_date=now,
                updated_by=user,
                updated_date=now,
                description=description,
                sort_order=int(data.get("sort_order") or 0)
            )
            await self._repo.save_changes(upserts=[folder])

        logger.info(f"Created folder '{folder.path}' ({folder.id}) in site {site_id} by {user}")
        return folder

    async def update_folder(self, folder_id: str, patch: Dict[str, Any], caller: Optional[Caller] = None) -> Folder:
        site_id = await self._site_of(folder_id)

        async with self._locks.hold(site_id):
            folders = await self._repo.list_by_site(site_id)
            folder = self._find(folders, folder_id)
            self._check_mutate(folder, caller)

            if patch.get("parent_id", folder.parent_id) != folder.parent_id:
                raise ValidationError("Use the move operation to change a folder's parent")
            if patch.get("site_id", folder.site_id) != folder.site_id:
                raise ValidationError("A folder cannot change heritage site")

            new_name = folder.name
            if patch.get("name") is not None:
                siblings = [f for f in folders if f.parent_id == folder.parent_id]
                new_name = validate_name(patch["name"], siblings, exclude_id=folder.id)
            description = (
                validate_description(patch["description"]) if "description" in patch else folder.description
            )
            folder_type = validate_folder_type(patch["type"]) if patch.get("type") is not None else folder.type
            sort_order = int(patch["sort_order"]) if patch.get("sort_order") is not None else folder.sort_order

            renamed = new_name != folder.name
            folder.name = new_name
            folder.description = description
            folder.type = folder_type
            folder.sort_order = sort_order
            self._stamp(folder, caller)

            upserts = [folder]
            if renamed:
                parent = next((f for f in folders if f.id == folder.parent_id), None)
                upserts = _relocate_subtree(folder, parent, folders)
            await self._repo.save_changes(upserts=upserts)

        logger.info(f"Updated folder {folder_id} ({len(upserts)} records rewritten)")
        return folder

    async def update_folder_permissions(
        self,
        folder_id: str,
        allowed_roles: List[str],
        caller: Optional[Caller] = None
    ) -> Folder:
        site_id = await self._site_of(folder_id)

        async with self._locks.hold(site_id):
            folders = await self._repo.list_by_site(site_id)
            folder = self._find(folders, folder_id)
            self._check_mutate(folder, caller)

            folder.allowed_roles = validate_allowed_roles(allowed_roles)
            self._stamp(folder, caller)
            await self._repo.save_changes(upserts=[folder])

        logger.info(f"Folder {folder_id} allowed roles set to {folder.allowed_roles}")
        return folder

    async def move_folder(self, folder_id: str, new_parent_id: Optional[str], caller: Optional[Caller] = None) -> Folder:
        site_id = await self._site_of(folder_id)

        async with self._locks.hold(site_id):
            folders = await self._repo.list_by_site(site_id)
            folder = self._find(folders, folder_id)
            self._check_mutate(folder, caller)

            new_parent = validate_move(folder_id, new_parent_id, folders)
            if new_parent is not None and caller is not None and not is_visible(new_parent, caller.effective_role):
                raise NotFoundError(f"Destination folder {new_parent_id} not found")

            if folder.parent_id == new_parent_id:
                logger.debug(f"Folder {folder_id} already under {new_parent_id}; nothing to move")
                return folder

            siblings = [f for f in folders if f.parent_id == new_parent_id]
            validate_name(folder.name, siblings, exclude_id=folder.id)

            folder.parent_id = new_parent_id
            self._stamp(folder, caller)
            changed = _relocate_subtree(folder, new_parent, folders)
            await self._repo.save_changes(upserts=changed)

        logger.info(f"Moved folder {folder_id} to '{folder.path}' ({len(changed) - 1} descendants updated)")
        return folder

    async def delete_folder(self, folder_id: str, recursive: bool = False, caller: Optional[Caller] = None) -> List[str]:
        site_id = await self._site_of(folder_id)

        async with self._locks.hold(site_id):
            folders = await self._repo.list_by_site(site_id)
            folder = self._find(folders, folder_id)
            self._check_mutate(folder, caller)

            descendants = _descendants(folder_id, folders)
            if descendants and not recursive:
                raise NotEmptyError(
                    f"Folder '{folder.name}' has {len(descendants)} subfolders; delete recursively or empty it first"
                )
            for descendant in descendants:
                if caller is not None and not is_visible(descendant, caller.effective_role):
                    raise PermissionDenied(f"Subtree of '{folder.name}' contains folders you cannot modify")

            doomed = [folder_id] + [d.id for d in descendants]
            if await self._documents.deletion_blocked(doomed):
                raise NotEmptyError(f"Folder '{folder.name}' still holds documents")

            await self._repo.save_changes(deletes=doomed)

        logger.info(f"Deleted folder '{folder.path}' and {len(doomed) - 1} descendants from site {site_id}")
        try:
            await self._documents.folders_deleted(doomed, folder.parent_id)
        except Exception as e:
            logger.error(f"Document store failed to handle deletion of {folder_id}: {e}", exc_info=True)
        return doomed

    # Reads

    async def get_folder(self, folder_id: str, caller: Optional[Caller] = None) -> Folder:
        folder = await self._repo.get_by_id(folder_id)
        if folder is None:
            raise NotFoundError(f"Folder {folder_id} not found")
        if caller is not None and not is_visible(folder, caller.effective_role):
            raise PermissionDenied("You do not have permission to view this folder")
        await self._attach_document_counts([folder])
        return folder

    async def list_site_folders(self, site_id: int, caller: Optional[Caller] = None) -> List[Folder]:
        folders = self._visible(await self._repo.list_by_site(site_id), caller)
        folders.sort(key=lambda f: f.name.lower())
        return await self._attach_document_counts(folders)

    async def list_all_folders(self, caller: Optional[Caller] = None) -> List[Folder]:
        folders = self._visible(await self._repo.list_all(), caller)
        folders.sort(key=lambda f: (f.site_id, f.name.lower()))
        return await self._attach_document_counts(folders)

    async def get_children(self, folder_id: str, caller: Optional[Caller] = None) -> List[Folder]:
        folder = await self._repo.get_by_id(folder_id)
        if folder is None or (caller is not None and not is_visible(folder, caller.effective_role)):
            return []
        children = [f for f in await self._repo.list_by_site(folder.site_id) if f.parent_id == folder_id]
        children = self._visible(children, caller)
        children.sort(key=Folder.sort_key)
        return await self._attach_document_counts(children)

    async def get_tree(self, site_id: Optional[int], caller: Optional[Caller] = None) -> List[Folder]:
        """Permission-filtered forest for one site, or every site when site_id is None."""
        if site_id is None:
            folders = await self._repo.list_all()
        else:
            folders = await self._repo.list_by_site(site_id)
        visible = await self._attach_document_counts(self._visible(folders, caller))
        return build_tree(visible)

    async def get_breadcrumb(self, folder_id: str, caller: Optional[Caller] = None) -> List[BreadcrumbItem]:
        folder = await self._repo.get_by_id(folder_id)
        if folder is None:
            return []
        tree = await self.get_tree(folder.site_id, caller)
        return get_breadcrumb(folder_id, tree)

    async def get_folder_contents(self, folder_id: str, caller: Optional[Caller] = None) -> FolderContents:
        folder = await self.get_folder(folder_id, caller)
        site_folders = self._visible(await self._repo.list_by_site(folder.site_id), caller)
        index = _children_index(site_folders)

        subfolders = sorted(index.get(folder_id, []), key=Folder.sort_key)
        await self._attach_document_counts(subfolders)
        return FolderContents(
            folder=folder,
            subfolders=subfolders,
            child_counts={sub.id: len(index.get(sub.id, [])) for sub in subfolders}
        )

    async def get_folder_statistics(self, folder_id: str, caller: Optional[Caller] = None) -> Dict[str, int]:
        contents = await self.get_folder_contents(folder_id, caller)
        return {
            "document_count": contents.folder.document_count,
            "child_folder_count": len(contents.subfolders)
        }

    async def get_tree_statistics(self, site_id: Optional[int], caller: Optional[Caller] = None) -> Dict:
        return tree_statistics(await self.get_tree(site_id, caller))
