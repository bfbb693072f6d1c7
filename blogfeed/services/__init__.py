"""
High-level use cases for the blog feed.

Services are built once per process by ``build_services`` and handed to the
HTTP layer; routers call them instead of touching the store directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from blogfeed.core.config import Settings, get_settings
from blogfeed.core.events import ChangeFeed
from blogfeed.repositories.blob_store import PersistentStore, build_store
from blogfeed.services.auth_service import AuthService
from blogfeed.services.content_service import ContentService


@dataclass
class Services:
    feed: ChangeFeed
    auth: AuthService
    content: ContentService


def build_services(store: Optional[PersistentStore] = None, settings: Optional[Settings] = None) -> Services:
    settings = settings or get_settings()
    store = store or build_store(settings)
    feed = ChangeFeed()
    return Services(
        feed=feed,
        auth=AuthService(store=store, feed=feed, settings=settings),
        content=ContentService(store=store, feed=feed),
    )
