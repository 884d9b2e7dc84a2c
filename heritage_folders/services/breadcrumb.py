"""
Breadcrumb Resolver - root-to-folder path lookup over a built tree.
"""
from dataclasses import dataclass
from typing import List

from ..domain.entities import Folder
from ..domain.value_objects import FolderType


@dataclass(frozen=True)
class BreadcrumbItem:
    id: str
    name: str
    type: FolderType


def get_breadcrumb(folder_id: str, tree: List[Folder]) -> List[BreadcrumbItem]:
    """
    Find the path from the forest root down to ``folder_id``.

    Args:
        folder_id: Folder to locate
        tree: Root nodes returned by the tree builder

    Returns:
        Ordered items, root first and the folder itself last; empty when the
        folder is not in the tree (missing or filtered out by permissions)
    """
    visited = set()
    # Each entry carries the path that leads to the node
    stack = [(node, [node]) for node in reversed(tree)]
    while stack:
        node, path = stack.pop()
        if node.id in visited:
            continue
        visited.add(node.id)

        if node.id == folder_id:
            return [BreadcrumbItem(id=n.id, name=n.name, type=n.type) for n in path]

        for child in reversed(node.children):
            stack.append((child, path + [child]))

    return []
