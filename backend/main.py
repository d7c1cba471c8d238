"""
Business Planner FastAPI Backend

Main entry point for the HTTP shell over the planner's data-access layer.

Architecture:
- FastAPI handles HTTP routing and request/response serialization
- Pydantic schemas describe the entity bodies
- PlannerClient handles all persistence (SQLite or PostgreSQL)
- The public storage bucket is served read-only so upload URLs resolve
- A WebSocket publishes cache invalidations after every mutation

Run with:
    uvicorn backend.main:app --reload --port 8000

Or:
    python -m backend.main
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from backend.routers import (
    tasks_router,
    goals_router,
    events_router,
    notes_router,
    contacts_router,
    settings_router,
    settings_current_router,
    uploads_router,
    dashboard_router,
)
from backend.dependencies import get_config, get_database
from backend.websocket import websocket_endpoint
from bizplanner import __version__
from bizplanner.core.config import Config
from bizplanner.core.errors import DataAccessError, NotFoundError, UploadError

logger = logging.getLogger("backend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Runs startup and shutdown tasks:
    - Startup: Configure logging and verify the database
    - Shutdown: Log and exit
    """
    config = app.state.config
    logging.basicConfig(
        level=getattr(logging, str(config.get("log_level", "INFO")).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    try:
        db = get_database()
        logger.info(f"Database connected ({db.dialect})")
        logger.info(f"Config loaded from: {config.config_dir}")
    except FileNotFoundError as e:
        logger.error(str(e))
        logger.error("Run 'python scripts/init_db.py' to create the database.")
        # Allow app to start but endpoints will fail

    yield

    logger.info("Shutting down...")


async def data_access_error_handler(request: Request, exc: DataAccessError) -> JSONResponse:
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "code": "DATA_ACCESS"})


async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
    logger.warning(f"Upload failed: {exc.message}")
    return JSONResponse(status_code=400, content={"detail": exc.message, "code": "UPLOAD"})


def create_app(config: Optional[Config] = None) -> FastAPI:
    """
    Build the application.

    Args:
        config: Deployment configuration (defaults to the shared Config)
    """
    config = config or get_config()

    app = FastAPI(
        title="Business Planner API",
        description="""
    Business planner API: calendar, tasks, goals, notes, contacts,
    progress analytics and company branding.

    ## Features

    - **Entities**: list/create/update/delete for tasks, goals, events,
      notes, contacts and the settings row
    - **Uploads**: public file storage for logos and avatars
    - **Dashboard / Progress**: read-only aggregates
    - **WebSocket**: cache invalidation after every change
    """,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DataAccessError, data_access_error_handler)
    app.add_exception_handler(UploadError, upload_error_handler)

    # /settings/current must be registered before the generic settings routes
    app.include_router(settings_current_router)
    app.include_router(tasks_router)
    app.include_router(goals_router)
    app.include_router(events_router)
    app.include_router(notes_router)
    app.include_router(contacts_router)
    app.include_router(settings_router)
    app.include_router(uploads_router)
    app.include_router(dashboard_router)

    @app.websocket("/ws")
    async def websocket_route(websocket: WebSocket):
        """
        WebSocket endpoint for cache invalidation.

        Protocol:
        - Client sends: { "type": "subscribe", "topics": ["tasks", "events"] }
        - Server sends: { "type": "invalidate", "key": "tasks", "timestamp": "..." }
        """
        await websocket_endpoint(websocket)

    @app.get("/")
    async def root():
        """API root - returns basic info and available endpoints."""
        return {
            "name": "Business Planner API",
            "version": __version__,
            "docs": "/docs",
            "endpoints": {
                "tasks": "/api/tasks",
                "goals": "/api/goals",
                "events": "/api/events",
                "notes": "/api/notes",
                "contacts": "/api/contacts",
                "settings": "/api/settings/current",
                "uploads": "/api/uploads",
                "dashboard": "/api/dashboard",
                "progress": "/api/progress",
            }
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        try:
            db = get_database()
            db.execute_one("SELECT 1")
            return {"status": "healthy", "database": "connected"}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}

    bucket = config.get("storage_bucket", "public")
    bucket_dir = config.get_storage_directory() / bucket
    bucket_dir.mkdir(parents=True, exist_ok=True)
    app.mount(f"/{bucket}", StaticFiles(directory=str(bucket_dir)), name="storage")

    return app


app = create_app()


# Allow running directly with: python -m backend.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
