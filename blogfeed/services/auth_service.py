"""
Authentication use cases: signup, login and logout.

Passwords are compared in plaintext unless HASH_PASSWORDS is enabled; the
plaintext mode only reproduces demo behaviour and is not safe for real users.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from blogfeed.core.config import Settings, get_settings
from blogfeed.core.events import ChangeFeed
from blogfeed.core.security import hash_password, is_hashed, verify_password
from blogfeed.domain.errors import DuplicateUserError, InvalidCredentialsError, wrap_failures
from blogfeed.domain.records import Session, User, generate_id
from blogfeed.repositories.blob_store import USERS_KEY, PersistentStore
from blogfeed.services.session_service import SessionKeeper


@dataclass
class AuthService:
    """Owns the user table and the current session."""

    store: PersistentStore
    feed: ChangeFeed = field(default_factory=ChangeFeed)
    settings: Optional[Settings] = None
    id_factory: Callable[..., str] = generate_id

    def __post_init__(self):
        if self.settings is None:
            self.settings = get_settings()
        self._users: List[User] = [User.from_dict(r) for r in self.store.load(USERS_KEY)]
        self._sessions = SessionKeeper(self.store)

    # -------------------------------------- helpers --------------------------------------
    @property
    def users(self) -> List[User]:
        return list(self._users)

    @property
    def current_user(self) -> Optional[Session]:
        return self._sessions.current

    def _find_by_email(self, email: str) -> Optional[User]:
        for user in self._users:
            if user.email == email:
                return user
        return None

    # The user table is only replaced once the blob write went through.
    def _save_users(self, users: List[User]) -> None:
        self.store.save(USERS_KEY, [u.to_dict() for u in users])
        self._users = users
        self.feed.publish("users")

    def _start_session(self, user: User) -> Session:
        session = self._sessions.issue(user.public())
        self.feed.publish("session")
        return session

    # -------------------------------------- signup --------------------------------------
    def signup(self, email: str, password: str, display_name: str) -> Session:
        if self._find_by_email(email) is not None:
            raise DuplicateUserError()
        stored_password = hash_password(password) if self.settings.hash_passwords else password
        user = User(
            id=self.id_factory(u.id for u in self._users),
            email=email,
            password=stored_password,
            display_name=display_name,
        )
        with wrap_failures("Failed to sign up.", tag="auth"):
            self._save_users([*self._users, user])
            print(f"[auth] New user {user.id}")
            return self._start_session(user)

    # -------------------------------------- login --------------------------------------
    def login(self, email: str, password: str) -> Session:
        user = self._find_by_email(email)
        if self.settings.hash_passwords:
            matched = user is not None and verify_password(password, user.password)
        else:
            matched = user is not None and user.password == password
        if not matched:
            raise InvalidCredentialsError()
        with wrap_failures("Failed to log in.", tag="auth"):
            if self.settings.hash_passwords and not is_hashed(user.password):
                user = User(id=user.id, email=user.email, password=hash_password(password), display_name=user.display_name)
                self._save_users([user if u.id == user.id else u for u in self._users])
            return self._start_session(user)

    def logout(self) -> None:
        self._sessions.clear()
        self.feed.publish("session")
