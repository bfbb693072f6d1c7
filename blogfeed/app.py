"""FastAPI surface for the blog feed."""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from blogfeed.core.banner import ErrorBanner
from blogfeed.core.config import Settings, get_settings
from blogfeed.domain.errors import (
    BlogError,
    DuplicateUserError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    OperationFailedError,
)
from blogfeed.routers import auth as auth_router
from blogfeed.routers import banner as banner_router
from blogfeed.routers import posts as posts_router
from blogfeed.services import Services, build_services

_STATUS_BY_ERROR = {
    DuplicateUserError: 409,
    InvalidCredentialsError: 401,
    NotAuthenticatedError: 401,
    OperationFailedError: 500,
}


def _status_for(exc: BlogError) -> int:
    for error_type, status in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status
    return 400


def create_app(services: Optional[Services] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    # no interactive docs in prod
    is_prod = settings.app_env == "prod"
    app = FastAPI(
        title="Blog Feed",
        docs_url=None if is_prod else "/docs",
        redoc_url=None if is_prod else "/redoc",
        openapi_url=None if is_prod else "/openapi.json",
    )
    app.state.settings = settings
    app.state.services = services or build_services(settings=settings)
    app.state.banner = ErrorBanner()

    @app.exception_handler(BlogError)
    async def _blog_error(request: Request, exc: BlogError):
        request.app.state.banner.show(exc.message)
        print(f"[http] {request.method} {request.url.path}: {exc.message}")
        return JSONResponse({"error": exc.message}, status_code=_status_for(exc))

    app.include_router(auth_router.router)
    app.include_router(posts_router.router)
    app.include_router(banner_router.router)
    return app
