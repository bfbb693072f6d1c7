"""
End-to-end flows through the FastAPI surface using an in-memory store.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Garante que o pacote seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blogfeed.app import create_app  # noqa: E402
from blogfeed.core.config import Settings  # noqa: E402
from blogfeed.repositories.blob_store import PersistentStore  # noqa: E402
from blogfeed.repositories.json_storage import MemoryStore  # noqa: E402
from blogfeed.services import build_services  # noqa: E402


@pytest.fixture()
def services():
    settings = Settings(
        app_env="test",
        store_backend="memory",
        data_file=Path("unused.json"),
        database_url="",
        store_key_prefix="blog_",
        hash_passwords=False,
    )
    return build_services(store=PersistentStore(MemoryStore(), prefix="blog_"), settings=settings)


@pytest.fixture()
def client(services):
    return TestClient(create_app(services))


def _signup(client, email="a@x.com", password="secret", name="Alice"):
    resp = client.post("/auth/signup", json={"email": email, "password": password, "displayName": name})
    assert resp.status_code == 200
    return resp.json()["user"]


def test_example_scenario(client):
    alice = _signup(client)
    created = client.post("/posts", json={"title": "Hi", "content": "World"})
    assert created.status_code == 201
    post_id = created.json()["post"]["id"]

    posts = client.get("/posts").json()["posts"]
    assert len(posts) == 1
    assert posts[0]["authorName"] == "Alice"
    assert posts[0]["likes"] == []

    liked = client.post(f"/posts/{post_id}/like").json()["post"]
    assert liked["likes"] == [alice["id"]]
    assert liked["likedByMe"] is True

    unliked = client.post(f"/posts/{post_id}/like").json()["post"]
    assert unliked["likes"] == []


def test_duplicate_signup_sets_banner(client):
    _signup(client)
    resp = client.post("/auth/signup", json={"email": "a@x.com", "password": "x", "displayName": "Other"})
    assert resp.status_code == 409
    assert resp.json() == {"error": "User already exists"}
    assert client.get("/banner").json()["error"] == "User already exists"

    client.delete("/banner")
    assert client.get("/banner").json()["error"] is None


def test_login_logout_and_me(client):
    _signup(client)
    client.post("/auth/logout")
    assert client.get("/auth/me").json() == {"user": None}

    bad = client.post("/auth/login", json={"email": "a@x.com", "password": "nope"})
    assert bad.status_code == 401
    assert bad.json()["error"] == "Invalid email or password"

    ok = client.post("/auth/login", json={"email": "a@x.com", "password": "secret"})
    assert ok.status_code == 200
    assert client.get("/auth/me").json()["user"]["displayName"] == "Alice"
    assert client.get("/banner").json()["error"] is None


def test_protected_routes_need_session(client):
    assert client.post("/posts", json={"title": "t", "content": "c"}).status_code == 401
    assert client.get("/profile/posts").status_code == 401


def test_only_author_can_edit_or_delete(client):
    _signup(client)
    post_id = client.post("/posts", json={"title": "Hi", "content": "World"}).json()["post"]["id"]
    _signup(client, email="b@x.com", name="Bob")

    assert client.patch(f"/posts/{post_id}", json={"title": "pwned"}).status_code == 403
    assert client.delete(f"/posts/{post_id}").status_code == 403

    client.post("/auth/login", json={"email": "a@x.com", "password": "secret"})
    edited = client.patch(f"/posts/{post_id}", json={"title": "Hello"})
    assert edited.status_code == 200
    assert edited.json()["post"]["title"] == "Hello"


def test_delete_post_removes_comments(client):
    _signup(client)
    post_id = client.post("/posts", json={"title": "Hi", "content": "World"}).json()["post"]["id"]
    assert client.post(f"/posts/{post_id}/comments", json={"text": "nice"}).status_code == 201
    assert len(client.get(f"/posts/{post_id}/comments").json()["comments"]) == 1

    assert client.delete(f"/posts/{post_id}").json() == {"ok": True}
    assert client.get("/posts").json()["posts"] == []
    assert client.get(f"/posts/{post_id}/comments").json()["comments"] == []
    assert client.get(f"/posts/{post_id}").status_code == 404


def test_blank_comment_is_rejected(client):
    _signup(client)
    post_id = client.post("/posts", json={"title": "Hi", "content": "World"}).json()["post"]["id"]
    assert client.post(f"/posts/{post_id}/comments", json={"text": "   "}).status_code == 400


def test_profile_lists_only_my_posts(client):
    _signup(client)
    client.post("/posts", json={"title": "mine", "content": "."})
    _signup(client, email="b@x.com", name="Bob")
    client.post("/posts", json={"title": "bobs", "content": "."})

    data = client.get("/profile/posts").json()
    assert data["user"]["displayName"] == "Bob"
    assert [p["title"] for p in data["posts"]] == ["bobs"]


def test_banner_version_follows_mutations(client, services):
    before = client.get("/banner").json()["version"]
    _signup(client)
    assert client.get("/banner").json()["version"] == services.feed.version > before


class _ReadOnlyBackend(MemoryStore):
    def set(self, key, value):
        raise OSError("read-only")


def test_storage_failure_on_signup_reaches_banner():
    settings = Settings(
        app_env="test",
        store_backend="memory",
        data_file=Path("unused.json"),
        database_url="",
        store_key_prefix="blog_",
        hash_passwords=False,
    )
    svc = build_services(store=PersistentStore(_ReadOnlyBackend(), prefix="blog_"), settings=settings)
    client = TestClient(create_app(svc))

    resp = client.post("/auth/signup", json={"email": "a@x.com", "password": "secret", "displayName": "Alice"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to sign up."}
    assert client.get("/banner").json()["error"] == "Failed to sign up."
    assert svc.auth.users == []


def _settings_for(app_env: str) -> Settings:
    return Settings(
        app_env=app_env,
        store_backend="memory",
        data_file=Path("unused.json"),
        database_url="",
        store_key_prefix="blog_",
        hash_passwords=False,
    )


def test_docs_are_hidden_in_prod(services):
    prod = TestClient(create_app(services, settings=_settings_for("prod")))
    dev = TestClient(create_app(services, settings=_settings_for("dev")))

    assert prod.get("/docs").status_code == 404
    assert prod.get("/openapi.json").status_code == 404
    assert dev.get("/openapi.json").status_code == 200


def test_asgi_module_builds_app_from_environment(monkeypatch):
    import importlib

    from fastapi import FastAPI

    from blogfeed.core import config as core_config

    monkeypatch.setenv("STORE_BACKEND", "memory")
    core_config.get_settings.cache_clear()
    try:
        import blogfeed.asgi as asgi

        asgi = importlib.reload(asgi)
        assert isinstance(asgi.app, FastAPI)
        resp = TestClient(asgi.app).get("/posts")
        assert resp.json() == {"posts": []}
    finally:
        core_config.get_settings.cache_clear()
