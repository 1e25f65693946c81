"""
Backend API Service - FastAPI Application

Responsibilities:
- Serve the dashboard entry document and its static assets
- Expose GET /api/data aggregating registrations, stations and filter options
- Own the database pool lifecycle (open on startup, close on shutdown)

Endpoints:
- GET /            - Dashboard index document
- GET /api/data    - Dashboard envelope (chartData, stationData, filters)
- GET /health      - Liveness check, does not touch the database
- GET /<asset>     - Static files from STATIC_DIR
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import orjson
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from services.api.aggregation import fetch_dashboard
from utils.config import Settings, settings
from utils.db import Database

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "A critical error occurred while fetching data."


def get_db(request: Request) -> Database:
    return request.app.state.db


def create_app(app_settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the API application.

    Args:
        app_settings: Settings to use, defaults to the global settings
        database: Store client to use, defaults to one built from app_settings

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings
    db = database or Database(
        dsn=app_settings.DATABASE_URL,
        sslmode=app_settings.db_sslmode,
        min_size=app_settings.DB_POOL_MIN_SIZE,
        max_size=app_settings.DB_POOL_MAX_SIZE,
        timeout=app_settings.DB_POOL_TIMEOUT,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await db.open()
        app.state.db = db
        try:
            yield
        finally:
            await db.close()

    app = FastAPI(title=app_settings.APP_NAME, version=app_settings.APP_VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/data")
    async def get_dashboard_data(db: Database = Depends(get_db)) -> Response:
        try:
            payload = await fetch_dashboard(db)
        except Exception:
            logger.exception("--- SEVERE DATABASE ERROR ---")
            return PlainTextResponse(ERROR_MESSAGE, status_code=500)

        return Response(
            content=orjson.dumps(payload.model_dump(mode="json")),
            media_type="application/json",
        )

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        index_path = app_settings.index_path
        if not index_path.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(index_path)

    # Mounted last so API routes win over files of the same name.
    static_dir = Path(app_settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir), name="static")
    else:
        logger.warning("Static directory not found, serving API only: path=%s", str(static_dir))

    return app
