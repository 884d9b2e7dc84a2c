import pytest

from conftest import make_folder
from heritage_folders.api.exceptions import PermissionDenied
from heritage_folders.services.permissions import (
    can_mutate,
    ensure_can_mutate,
    filter_visible,
    is_privileged,
    is_staff,
    is_visible,
)


def test_public_folder_visible_to_everyone():
    folder = make_folder("Open", allowed_roles=["PUBLIC"])

    assert is_visible(folder, None)
    assert is_visible(folder, "COMMUNITY_MEMBER")


def test_restricted_folder():
    folder = make_folder("Restricted", allowed_roles=["HERITAGE_MANAGER"])

    assert is_visible(folder, "HERITAGE_MANAGER")
    assert is_visible(folder, "heritage_manager")
    assert not is_visible(folder, "CONTENT_MANAGER")
    assert not is_visible(folder, None)
    assert not is_visible(folder, "  ")


def test_no_inheritance_from_parent():
    parent = make_folder("Restricted", allowed_roles=["HERITAGE_MANAGER"])
    child = make_folder("Open", parent=parent, allowed_roles=["PUBLIC"])

    assert [f.name for f in filter_visible([parent, child], None)] == ["Open"]


def test_mutation_follows_visibility():
    folder = make_folder("Restricted", allowed_roles=["HERITAGE_MANAGER"])

    assert can_mutate(folder, "HERITAGE_MANAGER")
    assert not can_mutate(folder, "CONTENT_MANAGER")
    with pytest.raises(PermissionDenied):
        ensure_can_mutate(folder, "CONTENT_MANAGER")


@pytest.mark.parametrize("role,staff,privileged", [
    ("SYSTEM_ADMINISTRATOR", True, True),
    ("HERITAGE_MANAGER", True, False),
    ("CONTENT_MANAGER", True, False),
    ("COMMUNITY_MEMBER", False, False),
    ("PUBLIC", False, False),
    (None, False, False),
])
def test_role_tiers(role, staff, privileged):
    assert is_staff(role) is staff
    assert is_privileged(role) is privileged
