from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, status
from psycopg2.extensions import parse_dsn

from src.application.dtos.common_dto import HealthResponse, RootResponse
from src.infrastructure.api.middlewares import add_default_middlewares, add_exception_handlers
from src.infrastructure.api.routes.profile_routes import router as profile_router
from src.infrastructure.api.routes.user_routes import router as user_router
from src.infrastructure.config import load_settings
from src.infrastructure.database.postgres_client import PostgresClient, StorageError
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

SERVICE_NAME = "users-profiles-api"


def create_app(pg_client: PostgresClient | None = None) -> FastAPI:
    """Build the application around a storage backend.

    With ``pg_client=None`` both repositories keep their rows in memory.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if pg_client is not None:
            pg_client.close()

    app = FastAPI(
        title="Users & Profiles API",
        version="0.1.0",
        description="""
        ## Users & Profiles API

        Minimal JSON CRUD service over PostgreSQL.

        ### Resources
        - **Users**: create, read, rename and delete
        - **Profiles**: create and read

        ### Error Responses
        Errors carry no body, only a status code:
        - **400 Bad Request**: Malformed JSON, invalid id or empty required field
        - **404 Not Found**: No row with the requested id
        - **405 Method Not Allowed**: Method not supported on this path
        - **500 Internal Server Error**: Storage failure
        """,
        lifespan=lifespan,
    )
    app.state.user_repo = UserRepository(pg_client)
    app.state.profile_repo = ProfileRepository(pg_client)

    add_default_middlewares(app)
    add_exception_handlers(app)

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Get basic information about the API",
    )
    def root():
        """Get API root information."""
        return {"status": "ok", "service": SERVICE_NAME, "version": app.version}

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Check that the service can reach its storage",
    )
    def health():
        try:
            app.state.user_repo.ping()
        except StorageError as exc:
            logger.error("Health check failed: %s", exc)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR) from exc
        return {"status": "healthy"}

    app.include_router(user_router)
    app.include_router(profile_router)
    return app


def serve() -> None:
    """Open storage, verify it is reachable and serve HTTP until interrupted."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    pg_client: PostgresClient | None = None
    if settings.use_memory_storage:
        logger.warning("STORAGE_BACKEND=memory: data will not survive a restart")
    else:
        db_host = parse_dsn(settings.database_url).get("host", "localhost")
        logger.info("Connecting to PostgreSQL at %s", db_host)
        try:
            pg_client = PostgresClient.from_settings(settings)
            pg_client.ping()
        except StorageError as exc:
            logger.critical("Database unreachable, refusing to start: %s", exc)
            if pg_client is not None:
                pg_client.close()
            sys.exit(1)

    app = create_app(pg_client)
    logger.info("Listening on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
