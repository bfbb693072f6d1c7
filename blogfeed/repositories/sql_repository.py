"""Blob backend stored in a SQL table through SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select

from blogfeed.db.models import Blob
from blogfeed.db.session import get_session


class SQLBlobStore:
    """get/set/remove helpers wrapping the SQLAlchemy session."""

    def get(self, key: str) -> Optional[str]:
        with get_session() as session:
            entity = session.get(Blob, key)
            return entity.value if entity else None

    def set(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        with get_session() as session:
            entity = session.get(Blob, key)
            if not entity:
                session.add(Blob(key=key, value=value, updated_at=now))
            else:
                entity.value = value
                entity.updated_at = now
            session.commit()

    def remove(self, key: str) -> None:
        with get_session() as session:
            session.execute(delete(Blob).where(Blob.key == key))
            session.commit()

    def keys(self) -> list[str]:
        with get_session() as session:
            return list(session.execute(select(Blob.key)).scalars().all())
