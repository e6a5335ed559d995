"""
FastAPI application factory.

create_app() is the single entry point for building the app.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pymongo.asynchronous.mongo_client import AsyncMongoClient

from config import AppSettings
from errors import register_error_handlers
from infrastructure.email.factory import build_email_provider
from infrastructure.http_client import HttpClient
from infrastructure.redis_client import create_redis_client
from repositories.achievement_repository import AchievementRepository
from repositories.admin_repository import AdminRepository
from repositories.indexes import ensure_indexes
from repositories.seed import seed_default_content
from repositories.skill_repository import SkillRepository
from routes.achievement_routes import router as achievement_router
from routes.admin_routes import router as admin_router
from routes.contact_routes import router as contact_router
from routes.health_routes import router as health_router
from routes.project_routes import router as project_router
from routes.skill_routes import router as skill_router
from services.admin_service import AdminService
from services.token_service import TokenService
from services.upload_service import UploadService
from shared.log_context import setup_logging_middleware
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging, production=settings.is_production)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            environment=settings.env,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
            profiles_sample_rate=settings.sentry.sentry_profile_sample_rate,
        )

    # Built eagerly so a missing JWT secret fails at startup, not on first login
    token_service = TokenService(settings.jwt)
    upload_service = UploadService(settings.upload, settings.base_url)
    os.makedirs(upload_service.root, exist_ok=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        mongo_client: AsyncMongoClient = AsyncMongoClient(
            settings.db.mongodb_uri, tz_aware=True
        )
        db = mongo_client[settings.db.db_name]
        app.state.mongo_client = mongo_client
        app.state.db = db

        # Redis is optional; without it rate limiting is disabled
        redis_client = await create_redis_client(settings.redis.redis_uri)
        app.state.redis = redis_client

        http_client = HttpClient(timeout=10.0)
        app.state.http_client = http_client
        app.state.email_provider = build_email_provider(settings, http_client)

        await ensure_indexes(db)
        if settings.seed_sample_content:
            await seed_default_content(SkillRepository(db), AchievementRepository(db))
        await AdminService(
            AdminRepository(db), app.state.email_provider
        ).ensure_default_admin(settings.admin)

        log.info("app_started", env=settings.env, db_name=settings.db.db_name)

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        await http_client.aclose()
        await mongo_client.close()
        if redis_client is not None:
            await redis_client.aclose()
        log.info("app_stopped")

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=None if settings.is_production else settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_service = token_service
    app.state.upload_service = upload_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_logging_middleware(app)

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(admin_router)
    app.include_router(contact_router)
    app.include_router(project_router)
    app.include_router(skill_router)
    app.include_router(achievement_router)

    app.mount(
        "/uploads",
        StaticFiles(directory=str(upload_service.root)),
        name="uploads",
    )

    return app
