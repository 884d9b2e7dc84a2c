import pytest

from conftest import make_folder
from heritage_folders.api.exceptions import CycleError, DuplicateNameError, NotFoundError, ValidationError
from heritage_folders.domain.value_objects import FolderType
from heritage_folders.utils.validators import (
    validate_allowed_roles,
    validate_description,
    validate_folder_type,
    validate_move,
    validate_name,
)


class TestValidateName:

    def test_returns_trimmed_name(self):
        assert validate_name("  Maps  ", []) == "Maps"

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_rejects_blank(self, name):
        with pytest.raises(ValidationError):
            validate_name(name, [])

    def test_rejects_too_long(self):
        with pytest.raises(ValidationError):
            validate_name("a" * 101, [])

    def test_accepts_max_length(self):
        assert validate_name("a" * 100, []) == "a" * 100

    @pytest.mark.parametrize("name", ["Maps/1920", "Notes: draft", "Plans*", "Über"])
    def test_rejects_disallowed_characters(self, name):
        with pytest.raises(ValidationError):
            validate_name(name, [])

    def test_allows_punctuation_set(self):
        assert validate_name("Plans & Surveys (1920) [draft]_v-2", []) == "Plans & Surveys (1920) [draft]_v-2"

    def test_duplicate_is_case_insensitive(self):
        siblings = [make_folder("Maps")]
        with pytest.raises(DuplicateNameError):
            validate_name(" maps ", siblings)

    def test_excluded_sibling_is_ignored(self):
        existing = make_folder("Maps")
        assert validate_name("MAPS", [existing], exclude_id=existing.id) == "MAPS"


class TestFieldValidators:

    def test_description_trimmed(self):
        assert validate_description("  old survey  ") == "old survey"
        assert validate_description(None) is None

    def test_description_too_long(self):
        with pytest.raises(ValidationError):
            validate_description("x" * 501)

    def test_folder_type_default(self):
        assert validate_folder_type(None) is FolderType.GENERAL

    def test_folder_type_case_insensitive(self):
        assert validate_folder_type("maps") is FolderType.MAPS

    def test_unknown_folder_type(self):
        with pytest.raises(ValidationError):
            validate_folder_type("SECRET")

    def test_roles_normalized_and_deduplicated(self):
        assert validate_allowed_roles(["public", "PUBLIC", " heritage_manager "]) == ["PUBLIC", "HERITAGE_MANAGER"]

    @pytest.mark.parametrize("roles", [None, []])
    def test_roles_required(self, roles):
        with pytest.raises(ValidationError):
            validate_allowed_roles(roles)

    def test_unknown_role(self):
        with pytest.raises(ValidationError):
            validate_allowed_roles(["PUBLIC", "JANITOR"])


class TestValidateMove:

    def setup_method(self):
        self.a = make_folder("A")
        self.b = make_folder("B", parent=self.a)
        self.c = make_folder("C", parent=self.b)
        self.other = make_folder("Other")
        self.foreign = make_folder("Foreign", site_id=2)
        self.folders = [self.a, self.b, self.c, self.other, self.foreign]

    def test_move_to_root_passes(self):
        assert validate_move(self.c.id, None, self.folders) is None

    def test_returns_new_parent(self):
        assert validate_move(self.c.id, self.other.id, self.folders) is self.other

    def test_into_itself(self):
        with pytest.raises(CycleError):
            validate_move(self.a.id, self.a.id, self.folders)

    def test_into_descendant(self):
        with pytest.raises(CycleError):
            validate_move(self.a.id, self.c.id, self.folders)

    def test_unknown_folder(self):
        with pytest.raises(NotFoundError):
            validate_move("missing", None, self.folders)

    def test_unknown_parent(self):
        with pytest.raises(NotFoundError):
            validate_move(self.c.id, "missing", self.folders)

    def test_parent_in_other_site(self):
        with pytest.raises(NotFoundError):
            validate_move(self.c.id, self.foreign.id, self.folders)

    def test_corrupted_chain_terminates(self):
        x = make_folder("X")
        y = make_folder("Y", parent=x)
        x.parent_id = y.id
        moved = make_folder("Moved")
        assert validate_move(moved.id, x.id, [x, y, moved]) is x
