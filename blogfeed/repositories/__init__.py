"""
Persistence adapters.

Backends store named string blobs (JSON file, SQL table or memory);
PersistentStore turns those blobs into record collections for the services.
"""

from .blob_store import PersistentStore
from .json_storage import JSONFileStore, MemoryStore
from .sql_repository import SQLBlobStore

__all__ = ["PersistentStore", "JSONFileStore", "MemoryStore", "SQLBlobStore"]
