"""
Smoke tests for the SQL blob backend against a temporary SQLite database.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blogfeed.core import config as core_config  # noqa: E402
from blogfeed.db import models  # noqa: E402
from blogfeed.db import session as db_session  # noqa: E402
from blogfeed.repositories.blob_store import PersistentStore, build_store  # noqa: E402
from blogfeed.repositories.sql_repository import SQLBlobStore  # noqa: E402


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Configura um SQLite temporário e reseta caches de settings/engine."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("STORE_BACKEND", "sql")
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]

    engine = db_session.get_engine()
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    core_config.get_settings.cache_clear()


def test_set_get_remove(temp_db):
    repo = SQLBlobStore()
    assert repo.get("blog_posts") is None
    repo.set("blog_posts", "[]")
    repo.set("blog_posts", '[{"id": "p1"}]')
    assert repo.get("blog_posts") == '[{"id": "p1"}]'
    assert repo.keys() == ["blog_posts"]
    repo.remove("blog_posts")
    assert repo.get("blog_posts") is None


def test_build_store_uses_sql_backend(temp_db):
    store = build_store()
    assert isinstance(store.backend, SQLBlobStore)
    store.save("comments", [{"id": "c1", "postId": "p1"}])
    assert PersistentStore(SQLBlobStore(), prefix="blog_").load("comments") == [{"id": "c1", "postId": "p1"}]


def test_migrate_json_blobs_into_sql(temp_db, tmp_path):
    sys.path.insert(0, str(ROOT / "scripts"))
    try:
        from migrate_to_sql import migrate
    finally:
        sys.path.remove(str(ROOT / "scripts"))

    from blogfeed.repositories.json_storage import JSONFileStore

    source = JSONFileStore(tmp_path / "data.json")
    source.set("blog_users", "[]")
    source.set("blog_posts", '[{"id": "p1"}]')

    assert migrate(source, SQLBlobStore()) == 2
    assert SQLBlobStore().get("blog_posts") == '[{"id": "p1"}]'


def test_build_store_creates_blob_table_on_empty_database(temp_db):
    models.Base.metadata.drop_all(bind=db_session.get_engine())

    store = build_store()
    store.save("posts", [{"id": "p1"}])

    assert store.load("posts") == [{"id": "p1"}]


def test_sqlite_connections_are_shared_across_threads():
    assert db_session._connect_args("sqlite:///blog.db") == {"check_same_thread": False}
    assert db_session._connect_args("postgresql://user:pw@localhost/blog") == {}
