"""
Main FastAPI Application
Entry point for the Staff Roster API.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from staff_roster.config.settings import LOG_LEVEL, ROSTER_DB_PATH
from staff_roster.controllers.roster_controller import router as roster_router
from staff_roster.controllers.settings_controller import router as settings_router
from staff_roster.exceptions import RosterError

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        level=getattr(logging, LOG_LEVEL, logging.INFO),
    )


async def roster_error_handler(request: Request, exc: RosterError) -> JSONResponse:
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


def create_app(db_path: Optional[str] = None) -> FastAPI:
    setup_logging()
    app = FastAPI(
        title="Staff Roster API",
        description="Staff roster management with configurable fields and bulk import",
        version="1.0.0",
    )
    # Store is opened lazily on first request
    app.state.db_path = db_path or ROSTER_DB_PATH
    app.state.store = None

    app.add_exception_handler(RosterError, roster_error_handler)

    # Include routers
    app.include_router(roster_router)
    app.include_router(settings_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"message": "Staff Roster API", "version": "1.0.0"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
