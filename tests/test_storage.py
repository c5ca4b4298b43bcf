import pytest

from paudle.exceptions import StorageError
from paudle.services.storage import FileStore, MemoryStore, MongoStore, create_store


class FakeCollection:
    """Enough of a pymongo collection for the key-value store."""

    def __init__(self):
        self.documents = {}

    def find_one(self, query):
        return self.documents.get(query["_id"])

    def update_one(self, query, update, upsert=False):
        document = self.documents.get(query["_id"])
        if document is None and upsert:
            document = {"_id": query["_id"]}
            self.documents[query["_id"]] = document
        document.update(update["$set"])

    def delete_one(self, query):
        self.documents.pop(query["_id"], None)


class FakeClient:
    def __init__(self):
        self.databases = {}

    def __getitem__(self, name):
        return self.databases.setdefault(name, {"kv_store": FakeCollection()})

    def close(self):
        pass


@pytest.fixture(params=["memory", "file", "mongo"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    if request.param == "file":
        return FileStore(str(tmp_path / "saves"))
    return MongoStore(client=FakeClient())


def test_missing_key_returns_none(any_store):
    assert any_store.get("paudle_save_v1") is None


def test_set_get_delete(any_store):
    any_store.set("paudle_save_v1", b'{"word": "pause"}')
    assert any_store.get("paudle_save_v1") == b'{"word": "pause"}'

    any_store.set("paudle_save_v1", b"{}")
    assert any_store.get("paudle_save_v1") == b"{}"

    any_store.delete("paudle_save_v1")
    assert any_store.get("paudle_save_v1") is None


def test_delete_missing_key_is_not_an_error(any_store):
    any_store.delete("nothing_here")


def test_file_store_persists_across_instances(tmp_path):
    FileStore(str(tmp_path)).set("paudle_history_v1", b"data")
    assert FileStore(str(tmp_path)).get("paudle_history_v1") == b"data"


def test_file_store_rejects_path_like_keys(tmp_path):
    with pytest.raises(StorageError):
        FileStore(str(tmp_path)).set("../escape", b"x")


def test_mongo_store_requires_uri():
    with pytest.raises(StorageError):
        MongoStore()


def test_create_store_backends(tmp_path):
    assert isinstance(create_store({'STORE_BACKEND': 'memory'}), MemoryStore)
    assert isinstance(create_store({'STORE_BACKEND': 'file', 'STORE_PATH': str(tmp_path)}), FileStore)
    with pytest.raises(ValueError):
        create_store({'STORE_BACKEND': 'floppy'})
