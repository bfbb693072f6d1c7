from __future__ import annotations

from fastapi import APIRouter, Request

from blogfeed.routers.deps import banner, current_user, services, text_field

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup")
def signup(request: Request, payload: dict):
    banner(request).dismiss()
    session = services(request).auth.signup(
        text_field(payload, "email"),
        text_field(payload, "password"),
        text_field(payload, "displayName"),
    )
    return {"user": session.to_dict()}


@router.post("/login")
def login(request: Request, payload: dict):
    banner(request).dismiss()
    session = services(request).auth.login(text_field(payload, "email"), text_field(payload, "password"))
    return {"user": session.to_dict()}


@router.post("/logout")
def logout(request: Request):
    services(request).auth.logout()
    return {"ok": True}


@router.get("/me")
def me(request: Request):
    user = current_user(request)
    return {"user": user.to_dict() if user else None}
