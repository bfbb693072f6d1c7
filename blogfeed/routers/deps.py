"""Shared helpers for routers: service lookup and session guards."""
from __future__ import annotations

from fastapi import HTTPException, Request

from blogfeed.core.banner import ErrorBanner
from blogfeed.domain.records import Comment, Post, Session
from blogfeed.services import Services


def services(request: Request) -> Services:
    svc = getattr(request.app.state, "services", None)
    if svc is None:
        raise RuntimeError("Services not configured")
    return svc


def banner(request: Request) -> ErrorBanner:
    return request.app.state.banner


def current_user(request: Request) -> Session | None:
    return services(request).auth.current_user


def require_user(request: Request) -> Session:
    """Protected pages send anonymous visitors back to login."""
    user = current_user(request)
    if user is None:
        raise HTTPException(401, "You must be logged in")
    return user


def text_field(payload: dict, name: str) -> str:
    value = payload.get(name)
    return "" if value is None else str(value)


def post_view(post: Post, user: Session | None) -> dict:
    data = post.to_dict()
    data["likeCount"] = len(post.likes)
    data["likedByMe"] = bool(user and user.id in post.likes)
    data["isAuthor"] = bool(user and user.id == post.author_id)
    return data


def comment_view(comment: Comment) -> dict:
    return comment.to_dict()
