"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from rbac_admin.core.config import settings
from rbac_admin.core.middleware import setup_middleware
from rbac_admin.core.exceptions import AdminError
from rbac_admin.core.response import error
from rbac_admin.db.init_db import init_db
from rbac_admin.db.session import get_db

from rbac_admin.api.auth import router as auth_router
from rbac_admin.api.users import router as users_router
from rbac_admin.api.roles import router as roles_router
from rbac_admin.api.permissions import router as permissions_router
from rbac_admin.api.dashboard import router as dashboard_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("rbac_admin")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("🚀 Starting %s", settings.APP_NAME)
    try:
        init_db()
    except SQLAlchemyError:
        logger.exception("Database initialisation failed")
        raise
    logger.info("✅ Database ready at %s", settings.DATABASE_URL)

    yield

    logger.info("🔻 Shutting down %s", settings.APP_NAME)


app = FastAPI(
    title="RBAC Admin API",
    description="User, role and permission administration",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Middleware
setup_middleware(app)


@app.exception_handler(AdminError)
async def admin_exception_handler(request: Request, exc: AdminError):
    return JSONResponse(
        status_code=exc.status_code,
        content=error(exc.message, exc.status_code),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error(str(exc.detail), exc.status_code),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    msg = "Invalid parameters"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        msg = f"Invalid parameter '{field}': {first.get('msg')}" if field else first.get("msg", msg)
    return JSONResponse(status_code=400, content=error(msg, 400))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=error("Internal server error", 500))


# Register routers
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(roles_router, prefix="/api")
app.include_router(permissions_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/api/health")
async def health(db: Session = Depends(get_db)):
    """Report whether the database answers."""
    db_ok = True
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database")
        db_ok = False

    return {
        "status": "ok" if db_ok else "degraded",
        "database": "ok" if db_ok else "error",
    }
