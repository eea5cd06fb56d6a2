from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from shared.config import Settings, get_settings
from shared.database import DatabaseSessionFactory
from shared.exceptions import register_exception_handlers  # central mapping
from shared.http import RequestContextMiddleware, health_router
from shared.logging import configure_logging, get_logger
from websites.api import public_router, websites_router
from websites.application import OwnerProfileService, WebsiteService
from websites.infrastructure.slug_oracle import RecordStoreSlugOracle
from websites.infrastructure.token_verifier import JWTTokenVerifier
from websites.infrastructure.unit_of_work import SQLAlchemyWebsitesUnitOfWork

logger = get_logger(__name__)


def _wire(app: FastAPI, settings: Settings, db: DatabaseSessionFactory) -> None:
    """Composition root: the only place that knows concrete adapters."""

    def uow_factory() -> SQLAlchemyWebsitesUnitOfWork:
        return SQLAlchemyWebsitesUnitOfWork(db)

    app.state.settings = settings
    app.state.db = db
    app.state.website_service = WebsiteService(
        uow_factory=uow_factory,
        oracle=RecordStoreSlugOracle(uow_factory),
    )
    app.state.profile_service = OwnerProfileService(uow_factory=uow_factory)
    app.state.token_verifier = JWTTokenVerifier(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        audience=settings.JWT_AUDIENCE or None,
    )


def create_app(
    settings: Optional[Settings] = None,
    db: Optional[DatabaseSessionFactory] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    db = db or DatabaseSessionFactory(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        timeout_seconds=settings.DATABASE_TIMEOUT_SECONDS,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.AUTO_CREATE_SCHEMA:
            await db.create_all()
        logger.info("Application started", environment=settings.ENVIRONMENT)
        try:
            yield
        finally:
            await db.dispose()

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} API",
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
        swagger_ui_parameters={"persistAuthorization": True},
    )
    _wire(app, settings, db)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )
    # X-Request-ID + structlog context
    app.add_middleware(RequestContextMiddleware)

    # Routers
    app.include_router(health_router)
    app.include_router(websites_router)
    app.include_router(public_router)

    # Centralized error handling -> {code, message, details?, correlation_id?}
    register_exception_handlers(app)

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "message": f"{settings.PROJECT_NAME} API",
            "docs": "/docs",
            "health": "/health",
        }

    # ---- Custom OpenAPI to add Bearer auth ----
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )
        schema.setdefault("components", {}).setdefault("securitySchemes", {})["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi

    return app


app = create_app()
