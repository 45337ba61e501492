# taskapi/main.py
"""FastAPI application for the task manager API."""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskapi.config import Settings
from taskapi.errors import register_error_handlers
from taskapi.models import isoformat_utc, utc_now
from taskapi.routes.auth import router as auth_router
from taskapi.routes.tasks import router as tasks_router
from taskapi.store import InMemoryTaskStore, TaskStore, seed_tasks
from taskapi.tokens import TokenService
from taskapi.users import UserDirectory, demo_user_directory

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

ENDPOINTS = (
    "POST   /api/login",
    "GET    /api/items",
    "POST   /api/items",
    "PUT    /api/items/{id}",
    "DELETE /api/items/{id}",
)


def build_task_store(settings: Settings) -> TaskStore:
    """In-memory store by default; SQL store when DATABASE_URL is set."""
    if settings.database_url:
        from taskapi.database import SqlTaskStore, create_task_engine

        return SqlTaskStore(create_task_engine(settings.database_url), seed=seed_tasks())
    return InMemoryTaskStore(seed_tasks())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the endpoint table and any demo-only settings on startup."""
    settings: Settings = app.state.settings
    logger.info("Task Manager API starting, health check at /api/health")
    for line in ENDPOINTS:
        logger.info("  %s", line)
    if settings.uses_default_secret:
        logger.warning("JWT_SECRET is not set; using the built-in development secret")
    if settings.allow_demo_passwords:
        logger.warning(
            "Demo plaintext passwords are enabled (admin, testuser, demo); "
            "set DEMO_PLAINTEXT_PASSWORDS=false outside local development"
        )
    yield


def create_app(
    settings: Optional[Settings] = None,
    task_store: Optional[TaskStore] = None,
    user_directory: Optional[UserDirectory] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Task Manager API", version=API_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.task_store = task_store if task_store is not None else build_task_store(settings)
    app.state.user_directory = (
        user_directory
        if user_directory is not None
        else demo_user_directory(settings.allow_demo_passwords)
    )
    app.state.token_service = TokenService(
        settings.jwt_secret, timedelta(hours=settings.token_ttl_hours)
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(tasks_router)

    @app.get("/api/health")
    def health_check():
        """Health check endpoint."""
        return {
            "success": True,
            "message": "Task Manager API is running",
            "timestamp": isoformat_utc(utc_now()),
            "version": API_VERSION,
        }

    return app


app = create_app()
