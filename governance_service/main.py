# main.py
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Ensure repo-root .env is loaded for the running server process.
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from governance_service.config import build_sqlalchemy_db_url, settings
from governance_service.console.cache import ViewCache
from governance_service.database import Base, engine
from governance_service.exceptions import register_exception_handlers
from governance_service.models import UserPostRecord, UserPreferencesRecord, UserProfileRecord  # noqa: F401 - register tables
from governance_service.routers import console, health, posts, preferences, statistics, users


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Console view cache lives for the lifetime of the process.
        app.state.view_cache = ViewCache(settings)
        yield
        app.state.view_cache.clear()

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(application)

    # Health is served at the root and under API_PREFIX.
    application.include_router(health.router)
    application.include_router(health.router, prefix=settings.api_prefix, include_in_schema=False)

    application.include_router(users.router, prefix=f"{settings.api_prefix}/users", tags=["users"])
    application.include_router(preferences.router, prefix=settings.api_prefix)
    application.include_router(posts.router, prefix=settings.api_prefix)
    application.include_router(statistics.router, prefix=settings.api_prefix)
    application.include_router(console.router)

    # Avoid accidental schema changes in shared MySQL databases.
    # For local/test sqlite usage, auto-create ORM tables is still convenient.
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
