from __future__ import annotations

from json_slice_explorer.accessors import MISSING
from json_slice_explorer.merging import (
    build_from_paths,
    build_submission,
    category_key,
    merge_category,
    merge_siblings,
    submit_category,
)

TABLE = {
    "Contacts": [["apps", "0", "contacts"], ["apps", "1", "contacts"]],
    "Files": [["apps", "9", "files"]],
    "Mixed": [["apps", "0", "contacts"], ["apps", "2", "settings"]],
}

DOC = {
    "apps": [
        {"contacts": [{"name": "Ann"}]},
        {"contacts": [{"name": "Bob"}]},
        {"settings": {"theme": "dark"}},
    ],
    "owner": {"name": "Cy", "age": 40},
}


class TestBuildFromPaths:
    def test_single_key_round_trip(self):
        assert build_from_paths({"k": [1, 2]}, [["k"]]) == {"k": [1, 2]}

    def test_nested_object(self):
        root = {"a": {"b": {"c": 5}}}
        assert build_from_paths(root, [["a", "b", "c"]]) == {"a": {"b": {"c": 5}}}

    def test_array_shape_is_preserved(self):
        assert build_from_paths(DOC, [["apps", "1", "contacts"]]) == {
            "apps": [None, {"contacts": [{"name": "Bob"}]}]
        }

    def test_unresolved_paths_are_skipped(self):
        assert build_from_paths(DOC, [["nope"], ["owner", "name"]]) == {"owner": {"name": "Cy"}}

    def test_accepts_dot_strings(self):
        assert build_from_paths(DOC, ["owner.age"]) == {"owner": {"age": 40}}

    def test_null_values_are_kept(self):
        assert build_from_paths({"a": None}, [["a"]]) == {"a": None}

    def test_source_is_never_mutated(self):
        root = {"a": {"b": 1}, "c": 2}
        out = build_from_paths(root, [["a"]])
        out["a"]["b"] = 99
        assert root == {"a": {"b": 1}, "c": 2}

    def test_only_selected_leaves_appear(self):
        out = build_from_paths(DOC, [["owner", "age"]])
        assert out == {"owner": {"age": 40}}


class TestMergeSiblings:
    def test_arrays_concatenate_in_order(self):
        assert merge_siblings([[1], [2, 3], [4]]) == [1, 2, 3, 4]

    def test_objects_later_wins(self):
        assert merge_siblings([{"a": 1}, {"a": 2, "b": 3}]) == {"a": 2, "b": 3}

    def test_missing_entries_are_dropped(self):
        assert merge_siblings([MISSING, [1], MISSING]) == [1]

    def test_nothing_left(self):
        assert merge_siblings([MISSING, MISSING]) is MISSING
        assert merge_siblings([]) is MISSING

    def test_mixed_returns_list(self):
        assert merge_siblings([[1], {"a": 1}]) == [[1], {"a": 1}]
        assert merge_siblings(["x", "y"]) == ["x", "y"]


def test_category_key():
    assert category_key("Contacts") == "contacts"


def test_merge_category_concatenates_contacts():
    assert merge_category(DOC, "Contacts", TABLE) == [{"name": "Ann"}, {"name": "Bob"}]


def test_merge_category_unknown_name():
    assert merge_category(DOC, "Unknown", TABLE) is MISSING


def test_submit_category():
    assert submit_category(DOC, "Contacts", TABLE) == {"contacts": [{"name": "Ann"}, {"name": "Bob"}]}
    assert submit_category(DOC, "Files", TABLE) == {}
    assert submit_category(DOC, "", TABLE) == {}


def test_submit_category_mixed_shapes():
    assert submit_category(DOC, "Mixed", TABLE) == {"mixed": [[{"name": "Ann"}], {"theme": "dark"}]}


class TestBuildSubmission:
    def test_paths_and_categories(self):
        out = build_submission(DOC, [["owner", "name"]], ["Contacts", "Files"], TABLE)
        assert out == {
            "owner": {"name": "Cy"},
            "contacts": [{"name": "Ann"}, {"name": "Bob"}],
        }

    def test_current_path_is_included_once(self):
        out = build_submission(DOC, [["owner", "name"]], [], TABLE, current_path=["owner", "name"])
        assert out == {"owner": {"name": "Cy"}}
        out = build_submission(DOC, [], [], TABLE, current_path=["owner", "age"])
        assert out == {"owner": {"age": 40}}

    def test_empty_request(self):
        assert build_submission(DOC, [], [], TABLE) == {}
