"""
Tree Builder - turns flat folder records into a nested forest.
"""
from collections import Counter
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..core.logging_config import get_logger
from ..domain.entities import Folder

logger = get_logger(__name__)

# Walk states used while resolving parents
_IN_PROGRESS = 1
_DONE = 2


def _resolve_parents(nodes: Dict[str, Folder]) -> Dict[str, Optional[str]]:
    """
    Map every node id to the parent it will hang under.

    A missing or out-of-scope parent makes the node a root. A parent chain
    that loops back on itself (corrupted data) is cut where the loop is
    detected, and that node becomes a root.
    """
    parent_of: Dict[str, Optional[str]] = {
        node_id: (node.parent_id if node.parent_id in nodes else None)
        for node_id, node in nodes.items()
    }

    state: Dict[str, int] = {}
    for start in nodes:
        if state.get(start) == _DONE:
            continue

        walk: List[str] = []
        current: Optional[str] = start
        while current is not None and state.get(current) != _DONE:
            if state.get(current) == _IN_PROGRESS:
                logger.warning(f"Folder hierarchy cycle detected at {current}; treating it as a root")
                parent_of[current] = None
                break
            state[current] = _IN_PROGRESS
            walk.append(current)
            current = parent_of[current]

        for node_id in walk:
            state[node_id] = _DONE

    return parent_of


def build_tree(folders: Iterable[Folder]) -> List[Folder]:
    """
    Build a forest from a flat list of folders.

    Input records are left untouched; the returned nodes are copies with
    ``children`` filled in. Roots and every child list are ordered by
    sort order, then case-insensitive name.

    Args:
        folders: Flat folder records for one site, or for all sites

    Returns:
        Root nodes of the forest
    """
    nodes: Dict[str, Folder] = {}
    for folder in folders:
        nodes[folder.id] = replace(folder, children=[])

    parent_of = _resolve_parents(nodes)

    roots: List[Folder] = []
    for node_id, node in nodes.items():
        parent_id = parent_of[node_id]
        if parent_id is None:
            roots.append(node)
        else:
            nodes[parent_id].children.append(node)

    for node in nodes.values():
        node.children.sort(key=Folder.sort_key)
    roots.sort(key=Folder.sort_key)
    return roots


def flatten_tree(tree: List[Folder]) -> List[Folder]:
    """Pre-order list of every node in the forest."""
    flat: List[Folder] = []
    stack = list(reversed(tree))
    while stack:
        node = stack.pop()
        flat.append(node)
        stack.extend(reversed(node.children))
    return flat


def tree_statistics(tree: List[Folder]) -> Dict:
    """Folder totals, document totals, deepest nesting and per-type counts."""
    total_folders = 0
    total_documents = 0
    max_depth = 0
    by_type: Counter = Counter()

    stack = [(node, 0) for node in tree]
    while stack:
        node, depth = stack.pop()
        total_folders += 1
        total_documents += node.document_count
        max_depth = max(max_depth, depth)
        by_type[node.type.value] += 1
        stack.extend((child, depth + 1) for child in node.children)

    return {
        "total_folders": total_folders,
        "total_documents": total_documents,
        "max_depth": max_depth,
        "folders_by_type": dict(by_type)
    }
