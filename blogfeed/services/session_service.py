"""Session helpers (the single current-user record and its persistence)."""
from __future__ import annotations

from typing import Optional

from blogfeed.domain.records import Session
from blogfeed.repositories.blob_store import CURRENT_USER_KEY, PersistentStore


class SessionKeeper:
    """Holds at most one active session and mirrors it to the store."""

    def __init__(self, store: PersistentStore) -> None:
        self._store = store
        record = store.load_record(CURRENT_USER_KEY)
        self._current: Optional[Session] = Session.from_dict(record) if record else None

    @property
    def current(self) -> Optional[Session]:
        return self._current

    def issue(self, session: Session) -> Session:
        """Replace the active session and persist it."""
        self._store.save_record(CURRENT_USER_KEY, session.to_dict())
        self._current = session
        return session

    def clear(self) -> None:
        """Drop the active session; a failed blob removal is only logged."""
        self._current = None
        try:
            self._store.remove(CURRENT_USER_KEY)
        except Exception as exc:
            print(f"[auth] Could not remove stored session: {exc}")
