from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logger import get_logger
from app.db.base import Base
from app.db.session import engine

# Import all models so SQLAlchemy can discover them for table creation
from app.models import UserProfile  # noqa: F401

from app.api.api import api_router
from app.api.middleware import GatekeeperMiddleware
from app.api.pages import router as pages_router
from app.api.v1.auth import get_token_codec
from app.services.gatekeeper import Gatekeeper

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup."""
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.APP_NAME} started")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Job board with role-based sessions for job seekers and recruiters",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS Middleware - allowlist from env (comma-separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.BACKEND_CORS_ORIGINS.split(",")
    if origin.strip()
]

app.add_middleware(
    GatekeeperMiddleware,
    gatekeeper=Gatekeeper(
        token_cookie=settings.TOKEN_COOKIE_NAME,
        role_cookie=settings.ROLE_COOKIE_NAME,
        codec=get_token_codec(),
        verify_token=settings.GATEKEEPER_VERIFY_TOKEN,
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include API router with /api/v1 prefix
app.include_router(api_router, prefix="/api/v1")
app.include_router(pages_router, tags=["Pages"])
