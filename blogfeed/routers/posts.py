from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from blogfeed.routers.deps import (
    banner,
    comment_view,
    current_user,
    post_view,
    require_user,
    services,
    text_field,
)

router = APIRouter(tags=["posts"])


def _post_or_404(request: Request, post_id: str):
    post = services(request).content.get_post(post_id)
    if post is None:
        raise HTTPException(404, "Post not found")
    return post


def _author_only(request: Request, post_id: str):
    user = require_user(request)
    post = _post_or_404(request, post_id)
    if post.author_id != user.id:
        raise HTTPException(403, "Only the author can change this post")
    return post


@router.get("/posts")
def list_posts(request: Request):
    user = current_user(request)
    return {"posts": [post_view(p, user) for p in services(request).content.list_posts()]}


@router.post("/posts", status_code=201)
def create_post(request: Request, payload: dict):
    user = require_user(request)
    banner(request).dismiss()
    post = services(request).content.create_post(
        text_field(payload, "title"),
        text_field(payload, "content"),
        payload.get("imageUrl") or None,
        author=user,
    )
    return {"post": post_view(post, user)}


@router.get("/posts/{post_id}")
def get_post(request: Request, post_id: str):
    return {"post": post_view(_post_or_404(request, post_id), current_user(request))}


@router.patch("/posts/{post_id}")
def update_post(request: Request, post_id: str, payload: dict):
    _author_only(request, post_id)
    banner(request).dismiss()
    post = services(request).content.update_post(post_id, payload)
    if post is None:
        raise HTTPException(404, "Post not found")
    return {"post": post_view(post, current_user(request))}


@router.delete("/posts/{post_id}")
def delete_post(request: Request, post_id: str):
    _author_only(request, post_id)
    banner(request).dismiss()
    services(request).content.delete_post(post_id)
    return {"ok": True}


@router.post("/posts/{post_id}/like")
def toggle_like(request: Request, post_id: str):
    user = require_user(request)
    post = services(request).content.toggle_like(post_id, user.id)
    if post is None:
        raise HTTPException(404, "Post not found")
    return {"post": post_view(post, user)}


@router.get("/posts/{post_id}/comments")
def list_comments(request: Request, post_id: str):
    return {"comments": [comment_view(c) for c in services(request).content.list_comments(post_id)]}


@router.post("/posts/{post_id}/comments", status_code=201)
def add_comment(request: Request, post_id: str, payload: dict):
    user = require_user(request)
    text = text_field(payload, "text")
    # blank comments are ignored by the feed UI
    if not text.strip():
        raise HTTPException(400, "Comment cannot be empty")
    comment = services(request).content.add_comment(post_id, text, author=user)
    return {"comment": comment_view(comment)}


@router.get("/profile/posts")
def my_posts(request: Request):
    user = require_user(request)
    posts = services(request).content.list_posts_by_author(user.id)
    return {"user": user.to_dict(), "posts": [post_view(p, user) for p in posts]}
