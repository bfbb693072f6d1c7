"""
Record collections on top of a key/value blob backend.

Every collection is serialized as a JSON array and rewritten wholesale on
save. Nothing here is transactional: saving posts and then comments are two
independent writes.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Protocol
import json

from blogfeed.core.config import Settings, get_settings

USERS_KEY = "users"
POSTS_KEY = "posts"
COMMENTS_KEY = "comments"
CURRENT_USER_KEY = "currentUser"


class BlobBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class PersistentStore:
    def __init__(self, backend: BlobBackend, prefix: str = "") -> None:
        self.backend = backend
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _decode(self, key: str) -> Any:
        raw = self.backend.get(self._key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            print(f"[store] Malformed blob under {self._key(key)!r}; treating as empty")
            return None

    def load(self, key: str) -> List[dict]:
        """Return the stored collection, or [] when missing or unreadable."""
        data = self._decode(key)
        if data is None:
            return []
        if not isinstance(data, list):
            print(f"[store] Blob {self._key(key)!r} is not a list; treating as empty")
            return []
        return [item for item in data if isinstance(item, dict)]

    def save(self, key: str, records: Iterable[dict]) -> None:
        self.backend.set(self._key(key), json.dumps(list(records), ensure_ascii=False))

    def load_record(self, key: str) -> Optional[dict]:
        data = self._decode(key)
        return data if isinstance(data, dict) else None

    def save_record(self, key: str, record: dict) -> None:
        self.backend.set(self._key(key), json.dumps(record, ensure_ascii=False))

    def remove(self, key: str) -> None:
        self.backend.remove(self._key(key))


def build_store(settings: Settings | None = None) -> PersistentStore:
    """Pick the blob backend configured via STORE_BACKEND."""
    from blogfeed.repositories.json_storage import JSONFileStore, MemoryStore

    settings = settings or get_settings()
    backend_name = settings.store_backend
    if backend_name == "memory":
        backend: BlobBackend = MemoryStore()
    elif backend_name == "sql":
        from blogfeed.db.create_tables import create_all
        from blogfeed.repositories.sql_repository import SQLBlobStore

        create_all()
        backend = SQLBlobStore()
    elif backend_name == "json":
        backend = JSONFileStore(settings.data_file)
    else:
        raise RuntimeError(f"Unknown STORE_BACKEND: {backend_name!r}")
    return PersistentStore(backend, prefix=settings.store_key_prefix)
