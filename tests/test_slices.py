from __future__ import annotations

from json_slice_explorer.paths import path_key
from json_slice_explorer.slices import Slice, extract_slices, search_datasets, serialize_slice


def slices(root, query):
    return list(extract_slices(root, query))


class TestExtractSlices:
    def test_value_in_object_inside_array(self, users_doc):
        assert slices(users_doc, "bob") == [Slice(("users", "1"), {"name": "bob"})]

    def test_value_directly_in_array(self):
        assert slices({"x": [1, 2, 3]}, "2") == [Slice(("x", "1"), 2)]

    def test_key_match_on_container_returns_subtree(self):
        doc = {"meta": {"a": 1}, "other": 0}
        assert slices(doc, "meta") == [Slice(("meta",), {"a": 1})]

    def test_key_match_on_primitive_returns_containing_object(self):
        doc = {"person": {"email": "a@b", "age": 3}}
        assert slices(doc, "email") == [Slice(("person",), {"email": "a@b", "age": 3})]

    def test_root_object_context_has_empty_path(self):
        doc = {"name": "Ann"}
        assert slices(doc, "ann") == [Slice((), doc)]

    def test_root_primitive(self):
        assert slices("needle", "need") == [Slice((), "needle")]

    def test_duplicates_collapse_first_wins(self):
        doc = {"p": {"first": "Sam", "last": "Samson"}}
        assert slices(doc, "sam") == [Slice(("p",), doc["p"])]

    def test_paths_are_unique(self):
        doc = {
            "a": [{"x": "hit", "hit": "hit"}, ["hit", "hit"]],
            "hit": {"hit": ["hit"]},
        }
        found = slices(doc, "hit")
        keys = [path_key(s.path) for s in found]
        assert len(keys) == len(set(keys))

    def test_empty_query(self, users_doc):
        assert slices(users_doc, "") == []


def test_serialize_slice():
    assert serialize_slice(Slice(("users", "1"), {"name": "bob"})) == {
        "path": "users.1",
        "value": {"name": "bob"},
    }


class TestSearchDatasets:
    def datasets(self):
        return [
            {"name": "alpha", "file": "alpha.json", "raw": {"items": [{"tag": "zz-unique"}]}},
            {"name": "beta", "file": "beta.json", "raw": {"items": [{"tag": "plain"}, {"tag": "plainer"}]}},
        ]

    def test_single_match_returns_full_document(self):
        response = search_datasets(self.datasets(), "zz-unique")
        assert response["ok"] is True
        assert response["count"] == 1
        assert response["datasets"] == [
            {"name": "alpha", "file": "alpha.json", "mode": "full", "raw": {"items": [{"tag": "zz-unique"}]}}
        ]

    def test_many_matches_in_one_dataset_returns_slices(self):
        response = search_datasets(self.datasets(), "plain")
        assert response["count"] == 2
        [entry] = response["datasets"]
        assert entry["mode"] == "slices"
        assert entry["slices"] == [
            {"path": "items.0", "value": {"tag": "plain"}},
            {"path": "items.1", "value": {"tag": "plainer"}},
        ]

    def test_matches_across_datasets_all_slices(self):
        response = search_datasets(self.datasets(), "tag")
        assert response["count"] == 3
        assert [d["mode"] for d in response["datasets"]] == ["slices", "slices"]

    def test_scope_restricts_to_named_dataset(self):
        response = search_datasets(self.datasets(), "tag", scope="alpha")
        assert [d["name"] for d in response["datasets"]] == ["alpha"]
        assert response["datasets"][0]["mode"] == "full"

    def test_empty_query_short_circuits(self):
        assert search_datasets(self.datasets(), "  ") == {"ok": True, "query": "", "count": 0, "datasets": []}

    def test_no_hits(self):
        response = search_datasets(self.datasets(), "nothing-here")
        assert response["count"] == 0
        assert response["datasets"] == []


class TestScope:
    def datasets(self):
        return [
            {"name": "all", "file": "all.json", "raw": {"k": "hit"}},
            {"name": "other", "file": "other.json", "raw": {"k": "hit"}},
        ]

    def test_dataset_named_all_can_be_scoped(self):
        response = search_datasets(self.datasets(), "hit", scope="all")
        assert [d["name"] for d in response["datasets"]] == ["all"]
        assert response["datasets"][0]["mode"] == "full"

    def test_sentinel_means_every_dataset_otherwise(self):
        response = search_datasets(self.datasets()[1:], "hit", scope="all")
        assert [d["name"] for d in response["datasets"]] == ["other"]
        response = search_datasets(self.datasets(), "hit", scope="ALL")
        assert response["count"] == 2

    def test_scope_by_file_name(self):
        response = search_datasets(self.datasets(), "hit", scope="other.json")
        assert [d["name"] for d in response["datasets"]] == ["other"]

    def test_unknown_scope_searches_nothing(self):
        assert search_datasets(self.datasets(), "hit", scope="ghost")["datasets"] == []
