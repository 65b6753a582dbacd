from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging import setup_logging
from app.core.exceptions import XcelerateException
from app.routers import auth, maintenance, notifications, settings as settings_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)
    if not settings.supabase_ready:
        logger.warning("SUPABASE_URL or SUPABASE_ANON_KEY is not set; hosted calls will fail")

    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(settings_router.router, prefix="/api/settings", tags=["settings"])
    app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])
    app.include_router(maintenance.router, prefix="/api/maintenance", tags=["maintenance"])

    @app.exception_handler(XcelerateException)
    async def handle_xcelerate_exception(_: Request, exc: XcelerateException) -> JSONResponse:
        headers = exc.headers if getattr(exc, "headers", None) else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    return app


app = create_app()
