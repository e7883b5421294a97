"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from smartdine.config import get_settings
from smartdine.infrastructure.database import engine, Base, SessionLocal
from smartdine.core.logging import configure_logging
from smartdine.core.middleware import setup_middleware
from smartdine.core.exceptions import register_exception_handlers

# Import all models so SQLAlchemy knows about them
from smartdine.domain.models.user import User
from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.models.menu import Category, MenuItem

# Import routers
from smartdine.interfaces.api.auth import router as auth_router
from smartdine.interfaces.api.restaurants import router as restaurants_router
from smartdine.interfaces.api.menus import router as menus_router
from smartdine.interfaces.api.qr import router as qr_router
from smartdine.interfaces.api.admin import router as admin_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


def bootstrap_admin() -> None:
    """Create the configured admin account on first start."""
    from smartdine.application.services.auth_service import ensure_admin
    from smartdine.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

    db = SessionLocal()
    try:
        ensure_admin(SQLAlchemyUserRepository(db, User), settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting SmartDine API...", env=settings.ENVIRONMENT)

    if settings.SECRET_KEY == "change-me":
        logger.warning("SECRET_KEY is the built-in default; set it before deploying")

    # Create DB tables (dev only; use migrations in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        bootstrap_admin()

    yield

    logger.info("SmartDine API stopped")


app = FastAPI(
    title="SmartDine — Digital Menu Platform",
    description="API Backend — restaurant menus, public publication and QR tracking",
    version="1.0.0",
    lifespan=lifespan,
)

# Request logging, correlation id and CORS
setup_middleware(app, settings)

register_exception_handlers(app)

app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(restaurants_router, prefix=settings.API_PREFIX)
app.include_router(menus_router, prefix=settings.API_PREFIX)
app.include_router(qr_router, prefix=settings.API_PREFIX)
app.include_router(admin_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    return {
        "name": "SmartDine API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"success": True, "status": "healthy", "environment": settings.ENVIRONMENT}
