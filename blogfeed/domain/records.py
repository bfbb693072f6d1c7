"""
Record types persisted in the blob store.

Attributes are snake_case; ``to_dict``/``from_dict`` translate to the stored
camelCase layout (``displayName``, ``authorId``, ``createdAt``...).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional
import secrets
import string

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 9


def generate_id(taken: Iterable[str] = ()) -> str:
    """Return an ``id_xxxxxxxxx`` identifier not present in ``taken``."""
    used = set(taken)
    while True:
        candidate = "id_" + "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))
        if candidate not in used:
            return candidate


def utc_now_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str | None) -> datetime:
    """Parse a stored ISO timestamp; unreadable values sort as the oldest."""
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Session:
    """Public projection of a user (no password)."""

    id: str
    email: str
    display_name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "email": self.email, "displayName": self.display_name}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Session":
        return cls(
            id=_str(data.get("id") or data.get("uid")),
            email=_str(data.get("email")),
            display_name=_str(data.get("displayName")),
        )


@dataclass(frozen=True)
class User:
    id: str
    email: str
    password: str
    display_name: str

    def public(self) -> Session:
        return Session(id=self.id, email=self.email, display_name=self.display_name)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "password": self.password,
            "displayName": self.display_name,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        return cls(
            id=_str(data.get("id") or data.get("uid")),
            email=_str(data.get("email")),
            password=_str(data.get("password")),
            display_name=_str(data.get("displayName")),
        )


@dataclass(frozen=True)
class Post:
    id: str
    title: str
    content: str
    author_id: str
    author_name: str
    created_at: str
    image_url: Optional[str] = None
    likes: List[str] = field(default_factory=list)

    def with_changes(self, **changes: Any) -> "Post":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "imageUrl": self.image_url,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "createdAt": self.created_at,
            "likes": list(self.likes),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Post":
        likes: List[str] = []
        for uid in data.get("likes") or []:
            uid = _str(uid)
            if uid not in likes:
                likes.append(uid)
        return cls(
            id=_str(data.get("id")),
            title=_str(data.get("title")),
            content=_str(data.get("content")),
            image_url=data.get("imageUrl") or None,
            author_id=_str(data.get("authorId")),
            author_name=_str(data.get("authorName")),
            created_at=_str(data.get("createdAt")),
            likes=likes,
        )


@dataclass(frozen=True)
class Comment:
    id: str
    post_id: str
    text: str
    author_id: str
    author_name: str
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "postId": self.post_id,
            "text": self.text,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Comment":
        return cls(
            id=_str(data.get("id")),
            post_id=_str(data.get("postId")),
            text=_str(data.get("text")),
            author_id=_str(data.get("authorId")),
            author_name=_str(data.get("authorName")),
            created_at=_str(data.get("createdAt")),
        )


def newest_first(records: Iterable[Any]) -> list:
    """Order by ``created_at`` descending; on ties the later-inserted record comes first."""
    return sorted(reversed(list(records)), key=lambda r: parse_timestamp(r.created_at), reverse=True)
