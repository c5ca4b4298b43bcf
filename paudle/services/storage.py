"""
Key-Value Storage

Opaque byte stores the save service persists games and history into.
Three backends are provided: in-memory, one file per key, and MongoDB.
"""

import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from pymongo.errors import PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..exceptions import StorageError


class KeyValueStore(ABC):
    """Minimal get/set/delete interface over bytes values."""

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the stored value, or None if the key is missing."""

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is not an error."""


class MemoryStore(KeyValueStore):
    """Dictionary-backed store, used for tests and throwaway sessions."""

    def __init__(self):
        self.data: Dict[str, bytes] = {}

    def get(self, key: str) -> Optional[bytes]:
        return self.data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.data[key] = bytes(value)

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


_SAFE_KEY = re.compile(r'^[A-Za-z0-9_.-]+$')


class FileStore(KeyValueStore):
    """Stores each key as a file inside ``directory``."""

    def __init__(self, directory: str):
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create store directory {self.directory}: {e}") from e

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(f"Invalid store key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: bytes) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix('.tmp')
        try:
            tmp_path.write_bytes(value)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e


class MongoStore(KeyValueStore):
    """
    Stores values in a MongoDB collection as ``{_id: key, value: bytes}`` documents.
    """

    def __init__(self, mongo_uri: Optional[str] = None, db_name: str = 'paudle',
                 collection_name: str = 'kv_store', client=None):
        """
        Initialize the store with a MongoDB connection.

        Args:
            mongo_uri: MongoDB connection string, ignored when ``client`` is given
            db_name: Database holding the collection
            collection_name: Collection used for the key-value documents
            client: Existing client to reuse instead of connecting
        """
        if client is None:
            if not mongo_uri:
                raise StorageError("MONGO_URI is required for the mongo store backend")
            client = MongoClient(mongo_uri, server_api=ServerApi('1'))
            try:
                client.admin.command('ping')
            except PyMongoError as e:
                raise StorageError(f"MongoDB connection error: {e}") from e

        self.client = client
        self.collection = client[db_name][collection_name]

    def get(self, key: str) -> Optional[bytes]:
        try:
            document = self.collection.find_one({"_id": key})
        except PyMongoError as e:
            raise StorageError(f"Failed to read {key}: {e}") from e
        if document is None:
            return None
        return bytes(document["value"])

    def set(self, key: str, value: bytes) -> None:
        try:
            self.collection.update_one({"_id": key}, {"$set": {"value": bytes(value)}}, upsert=True)
        except PyMongoError as e:
            raise StorageError(f"Failed to write {key}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self.collection.delete_one({"_id": key})
        except PyMongoError as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e

    def close_connection(self):
        """Close the MongoDB connection."""
        if self.client:
            self.client.close()


def create_store(settings) -> KeyValueStore:
    """
    Build the store selected by ``STORE_BACKEND``.

    Args:
        settings: Mapping with STORE_BACKEND, STORE_PATH, MONGO_URI and MONGO_DB (e.g. Flask config)
    """
    backend = settings.get('STORE_BACKEND', 'memory')
    if backend == 'memory':
        return MemoryStore()
    if backend == 'file':
        return FileStore(settings.get('STORE_PATH', 'saves'))
    if backend == 'mongo':
        return MongoStore(settings.get('MONGO_URI'), settings.get('MONGO_DB', 'paudle'))
    raise ValueError(f"Unknown store backend: {backend}")
