from fastapi import APIRouter, Request

from blogfeed.routers.deps import banner, services

router = APIRouter(prefix="/banner", tags=["banner"])


@router.get("")
def show(request: Request):
    return {"error": banner(request).message, "version": services(request).feed.version}


@router.delete("")
def dismiss(request: Request):
    banner(request).dismiss()
    return {"ok": True}
