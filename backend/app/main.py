"""Hive User API — FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Collaborators (user-data service, preferences store) wired once in create_app,
      never resolved per request
    - Global error handlers map HiveError → {success: false, msg} responses
    - CORS configured from settings (not hardcoded)
    - A store created here is disposed on shutdown; an injected store belongs to its caller

Design Decisions:
    - Factory over module-level app: the user-data service is deployment-specific,
      so there is nothing to import-time construct (run with `uvicorn --factory app.main:create_app`)
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes.health import build_health_router
from app.api.routes.user import build_user_router
from app.config import Settings, get_settings
from app.core.repository_protocols import PreferencesStore, UserDataService
from app.infrastructure.database import create_preferences_store
from app.infrastructure.observability import setup_logging
from app.infrastructure.service_loader import load_user_service
from app.services.user_controller import UserController

logger = logging.getLogger(__name__)

_UNSET = object()


def create_app(
    user_service: UserDataService | None = None,
    preferences_store: PreferencesStore | None | object = _UNSET,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the application with explicit dependencies.

    preferences_store left unset means "build one from DATABASE_URL";
    passing None explicitly disables persistence of UI settings.
    """
    settings = settings or get_settings()
    if user_service is None:
        user_service = load_user_service(settings.user_service_factory, settings)

    owned_store = None
    if preferences_store is _UNSET:
        owned_store = create_preferences_store(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            table_name=settings.preferences_table,
        )
        preferences_store = owned_store

    controller = UserController(
        user_service,
        preferences_store,
        jwt_secret=settings.jwt_secret,
        jwt_expires_in=settings.jwt_expires_in,
        default_team_id=settings.default_team_id,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        if preferences_store is None:
            logger.warning(
                "No DATABASE_URL configured — UI settings will not be persisted",
            )
        logger.info("Hive user API started")
        yield
        if owned_store is not None:
            await owned_store.dispose()
        logger.info("Hive user API shutting down")

    app = FastAPI(title="Hive User API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(build_health_router(preferences_store))
    app.include_router(build_user_router(controller))

    register_error_handlers(app)
    return app
