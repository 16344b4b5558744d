"""FastAPI application factory shared by the users and wallet services."""

import os
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adapter.mongodb.connection import close_client, get_mongodb_client, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes
from api.middleware.request_id import RequestIDMiddleware
from api.routes import health

logger = logging.getLogger(__name__)

# application.py is at <root>/src/api/application.py
_project_root = Path(__file__).parent.parent.parent
try:
    with open(_project_root / "pyproject.toml", "rb") as f:
        VERSION = tomllib.load(f)["project"]["version"]
except FileNotFoundError:
    VERSION = "0.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: ensure indexes on startup, close the client on shutdown."""
    client = get_mongodb_client()
    if client:
        if await ensure_all_indexes(client[DATABASE_NAME]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield

    await close_client()


def _configure_cors(app: FastAPI) -> None:
    # With "*" browsers refuse credentials, so they are only enabled for explicit origins
    cors_origins_env = os.getenv("CORS_ORIGINS", "*")

    if cors_origins_env == "*":
        cors_origins = ["*"]
        allow_credentials = False
        logger.warning(
            "CORS configured with wildcard origin ('*'). "
            "For production, set CORS_ORIGINS to specific domains"
        )
    else:
        cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
        allow_credentials = True
        logger.info(f"CORS configured with specific origins: {cors_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app(service_name: str, description: str, routers: list[APIRouter]) -> FastAPI:
    """Build a service app with CORS, request IDs, health check and the given routers."""
    app = FastAPI(
        title=service_name,
        description=description,
        version=VERSION,
        lifespan=lifespan,
    )

    _configure_cors(app)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    for router in routers:
        app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": service_name,
            "version": VERSION,
            "status": "running"
        }

    return app
