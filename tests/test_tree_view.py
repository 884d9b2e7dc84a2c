import pytest

from conftest import make_folder
from heritage_folders.services.breadcrumb import get_breadcrumb
from heritage_folders.services.tree_builder import build_tree
from heritage_folders.services.tree_view import MoveCommand, TreeViewState


def _tree():
    root = make_folder("Root")
    maps = make_folder("Maps", parent=root)
    year = make_folder("1920", parent=maps)
    other = make_folder("Other")
    return build_tree([root, maps, year, other]), root, maps, year, other


def test_toggle():
    state = TreeViewState()

    assert state.toggle("a") is True
    assert state.is_expanded("a")
    assert state.toggle("a") is False
    assert not state.is_expanded("a")


def test_expand_to_breadcrumb():
    tree, root, maps, year, _ = _tree()
    state = TreeViewState()

    state.expand_to(get_breadcrumb(year.id, tree))

    assert state.expanded == {root.id, maps.id}
    assert state.selected_id == year.id


def test_visible_nodes_follow_expansion():
    tree, root, maps, _, _ = _tree()
    state = TreeViewState(expanded={root.id})

    assert [n.name for n in state.visible_nodes(tree)] == ["Other", "Root", "Maps"]

    state.expanded.add(maps.id)
    assert [n.name for n in state.visible_nodes(tree)] == ["Other", "Root", "Maps", "1920"]


def test_prune_drops_removed_ids():
    tree, root, maps, year, other = _tree()
    state = TreeViewState(expanded={root.id, maps.id}, selected_id=year.id)

    rebuilt = build_tree([other])
    state.prune(rebuilt)

    assert state.expanded == set()
    assert state.selected_id is None


@pytest.mark.asyncio
async def test_move_command_runs_move(folder_service):
    a = await folder_service.create_folder(1, {"name": "A"})
    b = await folder_service.create_folder(1, {"name": "B"})

    moved = await MoveCommand(folder_id=b.id, target_parent_id=a.id).execute(folder_service)

    assert moved.path == "/A/B"
