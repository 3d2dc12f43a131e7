"""
FastAPI application for the Task Tracker
Run with: uvicorn task_tracker.main:app
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .api.routes import tasks, categories, stats, maintenance
from .config import Settings, settings
from .database import create_db_engine, init_db, run_migrations
from .repositories import SQLTaskStore
from .services.task_service import TaskService
from .utils.logging import setup_logging


logger = logging.getLogger(__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request input as 400 Bad Request."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The database engine and TaskService are created during startup and kept
    on app.state; a missing DATABASE_URL in production stops startup.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(app_settings.log_level)

        database_url = app_settings.resolve_database_url()
        engine = create_db_engine(
            database_url,
            timeout_seconds=app_settings.db_timeout_seconds,
            echo=app_settings.sql_echo,
        )
        init_db(engine)
        added_columns = run_migrations(engine)

        service = TaskService(SQLTaskStore(engine))
        service.seed_default_categories()
        if added_columns:
            service.repair_categories()

        app.state.settings = app_settings
        app.state.engine = engine
        app.state.task_service = service
        logger.info(f"Task Tracker started ({app_settings.environment})")

        yield

        engine.dispose()
        logger.info("Task Tracker stopped")

    app = FastAPI(title="Task Tracker", version=__version__, lifespan=lifespan)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
    app.include_router(categories.router, prefix="/categories", tags=["categories"])
    app.include_router(stats.router, prefix="/stats", tags=["stats"])
    app.include_router(maintenance.router, prefix="/maintenance", tags=["maintenance"])

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("task_tracker.main:app", host="0.0.0.0", port=8000)
