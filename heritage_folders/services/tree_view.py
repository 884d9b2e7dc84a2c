"""
Tree viewer state and drag-and-drop moves.

Expansion and selection belong to whoever is looking at the tree, not to
the folders, so they live here instead of on the entity.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from .breadcrumb import BreadcrumbItem
from .interfaces import IFolderService
from .tree_builder import flatten_tree
from ..domain.entities import Caller, Folder


@dataclass
class TreeViewState:
    """Which nodes a viewer has expanded, and which one is selected."""
    expanded: Set[str] = field(default_factory=set)
    selected_id: Optional[str] = None

    def is_expanded(self, folder_id: str) -> bool:
        return folder_id in self.expanded

    def toggle(self, folder_id: str) -> bool:
        """Flip a node open or closed. Returns the new expanded state."""
        if folder_id in self.expanded:
            self.expanded.discard(folder_id)
            return False
        self.expanded.add(folder_id)
        return True

    def select(self, folder_id: Optional[str]) -> None:
        self.selected_id = folder_id

    def expand_to(self, breadcrumb: Iterable[BreadcrumbItem]) -> None:
        """Open every ancestor on a breadcrumb and select its last item."""
        items = list(breadcrumb)
        if not items:
            return
        for item in items[:-1]:
            self.expanded.add(item.id)
        self.selected_id = items[-1].id

    def collapse_all(self) -> None:
        self.expanded.clear()

    def prune(self, tree: List[Folder]) -> None:
        """Forget ids that are no longer in a freshly built tree."""
        present = {node.id for node in flatten_tree(tree)}
        self.expanded &= present
        if self.selected_id not in present:
            self.selected_id = None

    def visible_nodes(self, tree: List[Folder]) -> List[Folder]:
        """Nodes a viewer would render, in display order."""
        rows: List[Folder] = []
        stack = list(reversed(tree))
        while stack:
            node = stack.pop()
            rows.append(node)
            if node.id in self.expanded:
                stack.extend(reversed(node.children))
        return rows


@dataclass(frozen=True)
class MoveCommand:
    """A drop of ``folder_id`` onto ``target_parent_id`` (None for the root level)."""
    folder_id: str
    target_parent_id: Optional[str]

    async def execute(self, folder_service: IFolderService, caller: Optional[Caller] = None) -> Folder:
        return await folder_service.move_folder(self.folder_id, self.target_parent_id, caller=caller)
