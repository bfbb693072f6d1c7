"""
Posts, comments and likes.

Collections live in memory and are written back to the store after every
mutation. Author checks for edits happen in the HTTP layer; update_post trusts
its caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional

from blogfeed.core.events import ChangeFeed
from blogfeed.domain.errors import NotAuthenticatedError, wrap_failures
from blogfeed.domain.records import Comment, Post, Session, generate_id, newest_first, utc_now_iso
from blogfeed.repositories.blob_store import COMMENTS_KEY, POSTS_KEY, PersistentStore

# Accepted spellings for editable post fields.
EDITABLE_FIELDS = {
    "title": "title",
    "content": "content",
    "image_url": "image_url",
    "imageUrl": "image_url",
}


@dataclass
class ContentService:
    store: PersistentStore
    feed: ChangeFeed = field(default_factory=ChangeFeed)
    clock: Callable[[], str] = utc_now_iso
    id_factory: Callable[..., str] = generate_id

    def __post_init__(self):
        self._posts: List[Post] = [Post.from_dict(r) for r in self.store.load(POSTS_KEY)]
        self._comments: List[Comment] = [Comment.from_dict(r) for r in self.store.load(COMMENTS_KEY)]

    # In-memory state only changes once the blob write went through.
    def _save_posts(self, posts: List[Post]) -> None:
        self.store.save(POSTS_KEY, [p.to_dict() for p in posts])
        self._posts = posts
        self.feed.publish("posts")

    def _save_comments(self, comments: List[Comment]) -> None:
        self.store.save(COMMENTS_KEY, [c.to_dict() for c in comments])
        self._comments = comments
        self.feed.publish("comments")

    @staticmethod
    def _require_author(author: Optional[Session]) -> Session:
        if author is None or not author.id:
            raise NotAuthenticatedError()
        return author

    # -------------------------------------- posts --------------------------------------
    def list_posts(self) -> List[Post]:
        return newest_first(self._posts)

    def list_posts_by_author(self, author_id: str) -> List[Post]:
        return [p for p in self.list_posts() if p.author_id == author_id]

    def get_post(self, post_id: str) -> Optional[Post]:
        for post in self._posts:
            if post.id == post_id:
                return post
        return None

    def create_post(self, title: str, content: str, image_url: Optional[str] = None, *, author: Optional[Session]) -> Post:
        author = self._require_author(author)
        with wrap_failures("Failed to save post."):
            post = Post(
                id=self.id_factory(p.id for p in self._posts),
                title=title,
                content=content,
                image_url=image_url or None,
                author_id=author.id,
                author_name=author.display_name,
                created_at=self.clock(),
                likes=[],
            )
            self._save_posts([*self._posts, post])
        return post

    def update_post(self, post_id: str, fields: Mapping[str, Any]) -> Optional[Post]:
        """Merge title/content/image_url into the post; other keys are ignored."""
        current = self.get_post(post_id)
        if current is None:
            return None
        changes = {}
        for name, value in fields.items():
            attr = EDITABLE_FIELDS.get(name)
            if attr is None:
                continue
            if attr == "image_url":
                changes[attr] = value or None
            else:
                changes[attr] = "" if value is None else str(value)
        with wrap_failures("Failed to save post."):
            updated = current.with_changes(**changes)
            self._save_posts([updated if p.id == post_id else p for p in self._posts])
        return updated

    def delete_post(self, post_id: str) -> bool:
        """Remove the post and every comment attached to it."""
        if self.get_post(post_id) is None:
            return False
        with wrap_failures("Failed to delete post."):
            self._save_posts([p for p in self._posts if p.id != post_id])
            self._save_comments([c for c in self._comments if c.post_id != post_id])
        return True

    def toggle_like(self, post_id: str, user_id: str) -> Optional[Post]:
        post = self.get_post(post_id)
        if post is None:
            return None
        if user_id in post.likes:
            likes = [uid for uid in post.likes if uid != user_id]
        else:
            likes = [*post.likes, user_id]
        updated = post.with_changes(likes=likes)
        with wrap_failures("Failed to update like."):
            self._save_posts([updated if p.id == post_id else p for p in self._posts])
        return updated

    # -------------------------------------- comments --------------------------------------
    def list_comments(self, post_id: str) -> List[Comment]:
        return newest_first(c for c in self._comments if c.post_id == post_id)

    def add_comment(self, post_id: str, text: str, *, author: Optional[Session]) -> Comment:
        author = self._require_author(author)
        with wrap_failures("Failed to add comment."):
            comment = Comment(
                id=self.id_factory(c.id for c in self._comments),
                post_id=post_id,
                text=text,
                author_id=author.id,
                author_name=author.display_name,
                created_at=self.clock(),
            )
            self._save_comments([*self._comments, comment])
        return comment
