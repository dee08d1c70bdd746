import gzip
import json

import pytest

from docschema.exceptions import DataFormatError, StoreError
from docschema.store import LocalDocumentStore, StoreDocument, is_collection_path, split_path


def test_path_parity():
    assert split_path("/users//u1/") == ["users", "u1"]
    assert is_collection_path("users")
    assert is_collection_path("users/u1/orders")
    assert not is_collection_path("users/u1")
    assert not is_collection_path("")


class TestLocalDocumentStore:
    def test_collection_sample_respects_limit(self, local_store):
        documents = local_store.sample("users", "collection", 2)
        assert [d.id for d in documents] == ["u1", "u2"]
        assert documents[0].path == "users/u1"

    def test_subcollections_are_not_document_fields(self, local_store):
        u1 = local_store.sample("users", "collection", 1)[0]
        assert u1.data == {"name": "Ada", "age": 36}

    def test_nested_collection(self, local_store):
        orders = local_store.sample("users/u1/orders", "collection", 50)
        assert [d.id for d in orders] == ["o1", "o2"]
        assert orders[1].path == "users/u1/orders/o2"

    def test_document_lookup(self, local_store):
        assert local_store.sample("users/u2", "document", 50) == [
            StoreDocument(id="u2", data={"name": "Grace"}, path="users/u2")
        ]

    def test_missing_data_yields_nothing(self, local_store):
        assert local_store.sample("nope", "collection", 5) == []
        assert local_store.sample("empty", "collection", 5) == []
        assert local_store.sample("users/zz", "document", 5) == []
        assert local_store.sample("users/zz/orders", "collection", 5) == []

    def test_parity_mismatch_yields_nothing(self, local_store):
        assert local_store.sample("users/u1", "collection", 5) == []
        assert local_store.sample("users", "document", 5) == []

    def test_malformed_tree_is_rejected(self):
        with pytest.raises(DataFormatError):
            LocalDocumentStore({"users": ["not", "a", "mapping"]})
        with pytest.raises(DataFormatError):
            LocalDocumentStore({"users": {"u1": "nope"}})

    def test_unexpected_failures_become_store_errors(self, local_store, monkeypatch):
        def boom(segments):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(local_store, "_collection", boom)
        with pytest.raises(StoreError) as exc_info:
            local_store.sample("users", "collection", 5)
        assert "disk on fire" in str(exc_info.value)
        assert isinstance(exc_info.value.cause, RuntimeError)


class TestExportFiles:
    def test_json_export(self, write_file, export_tree):
        store = LocalDocumentStore.from_export_file(str(write_file("export.json", export_tree)))
        assert len(store.sample("users", "collection", 10)) == 3

    def test_yaml_export(self, write_file):
        path = write_file(
            "export.yml",
            "posts:\n"
            "  p1:\n"
            "    title: Hello\n"
            "    published: 2024-01-02 03:04:05\n",
        )
        store = LocalDocumentStore.from_export_file(str(path))
        (post,) = store.sample("posts/p1", "document", 1)
        assert post.data["title"] == "Hello"
        assert post.data["published"].year == 2024

    def test_gzipped_export(self, tmp_path, export_tree):
        path = tmp_path / "export.json.gz"
        with gzip.open(path, "wt", encoding="utf-8") as f:
            json.dump(export_tree, f)
        store = LocalDocumentStore.from_export_file(str(path))
        assert store.sample("users/u3", "document", 1)[0].data["age"] == 21

    def test_invalid_json_export(self, write_file):
        with pytest.raises(DataFormatError):
            LocalDocumentStore.from_export_file(str(write_file("bad.json", "{nope")))

    def test_export_must_be_mapping(self, write_file):
        with pytest.raises(DataFormatError):
            LocalDocumentStore.from_export_file(str(write_file("list.json", [1, 2])))


class TestRecordsFiles:
    def test_ndjson_records(self, write_file):
        path = write_file("users.ndjson", '{"id": "a", "n": 1}\n{"n": 2}\n')
        store = LocalDocumentStore.from_records_file(str(path), "users")
        documents = store.sample("users", "collection", 10)
        assert [(d.id, d.data) for d in documents] == [("a", {"n": 1}), ("2", {"n": 2})]

    def test_json_array_records_under_subcollection(self, write_file):
        path = write_file("orders.json", [{"total": 1.5}, {"total": 2}])
        store = LocalDocumentStore.from_records_file(str(path), "users/u1/orders")
        documents = store.sample("users/u1/orders", "collection", 10)
        assert [d.path for d in documents] == ["users/u1/orders/1", "users/u1/orders/2"]
        assert float(documents[0].data["total"]) == 1.5

    def test_records_need_collection_path(self, write_file):
        path = write_file("users.ndjson", '{"n": 1}\n{"n": 2}\n')
        with pytest.raises(DataFormatError):
            LocalDocumentStore.from_records_file(str(path), "users/u1")

    def test_records_must_be_objects(self, write_file):
        path = write_file("bad.json", [1, 2])
        with pytest.raises(DataFormatError):
            LocalDocumentStore.from_records_file(str(path), "users")

    def test_max_records(self, write_file):
        path = write_file("users.ndjson", "".join(json.dumps({"i": i}) + "\n" for i in range(5)))
        store = LocalDocumentStore.from_records_file(str(path), "users", max_records=3)
        assert len(store.sample("users", "collection", 10)) == 3
