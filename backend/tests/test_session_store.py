"""
Tests for the local key-value session stores.
"""

import json

from shared.infrastructure.session_store import JsonFileSessionStore, MemorySessionStore


class TestMemorySessionStore:
    def test_get_missing_returns_default(self):
        store = MemorySessionStore()
        assert store.get("cart") is None
        assert store.get("cart", []) == []

    def test_set_and_get(self):
        store = MemorySessionStore()
        store.set("currentUser", {"id": "1"})
        assert store.get("currentUser") == {"id": "1"}
        assert store.keys() == ["currentUser"]

    def test_get_returns_copy(self):
        """Mutating a returned value must not change the stored snapshot."""
        store = MemorySessionStore({"orders": [{"id": "ORD-1"}]})
        orders = store.get("orders")
        orders.append({"id": "ORD-2"})
        assert store.get("orders") == [{"id": "ORD-1"}]

    def test_set_stores_copy(self):
        store = MemorySessionStore()
        value = {"items": [1]}
        store.set("cart", value)
        value["items"].append(2)
        assert store.get("cart") == {"items": [1]}

    def test_delete(self):
        store = MemorySessionStore({"cart": [], "currentUser": {"id": "1"}})
        store.delete("currentUser")
        assert store.get("currentUser") is None
        assert store.keys() == ["cart"]

    def test_delete_missing_key_is_noop(self):
        store = MemorySessionStore()
        store.delete("nothing")
        assert store.keys() == []


class TestJsonFileSessionStore:
    def test_missing_file_starts_empty(self, tmp_path):
        store = JsonFileSessionStore(tmp_path / "store.json")
        assert store.keys() == []
        assert not store.path.exists()

    def test_set_persists_to_disk(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        store = JsonFileSessionStore(path)
        store.set("cart", [{"product_id": "1", "quantity": 2}])

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "cart": [{"product_id": "1", "quantity": 2}]
        }

    def test_reload_sees_previous_writes(self, tmp_path):
        path = tmp_path / "store.json"
        JsonFileSessionStore(path).set("currentUser", {"id": "2", "name": "Estudiante"})

        reopened = JsonFileSessionStore(path)
        assert reopened.get("currentUser") == {"id": "2", "name": "Estudiante"}

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")

        store = JsonFileSessionStore(path)
        assert store.keys() == []

        store.set("cart", [])
        assert json.loads(path.read_text(encoding="utf-8")) == {"cart": []}

    def test_non_object_document_starts_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert JsonFileSessionStore(path).keys() == []

    def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonFileSessionStore(tmp_path / "store.json")
        for i in range(3):
            store.set("counter", i)
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_expands_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        store = JsonFileSessionStore("~/profile.json")
        assert store.path == tmp_path / "profile.json"
