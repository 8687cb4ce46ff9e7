"""Main entry point for the DeFi IDE backend FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST API for project file trees, protocol templates and version control.

To run the development server:
    uv run uvicorn main:app --reload

To run in production:
    uv run uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_workspace, shutdown_workspace
from api.exceptions import (
    generic_exception_handler,
    invalid_state_handler,
    not_found_handler,
    template_load_error_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import filesystem as filesystem_routes
from api.routes import templates as template_routes
from api.routes import version_control as version_control_routes
from config import Settings, setup_logging
from models.errors import InvalidStateError, NotFoundError, TemplateLoadError

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Reads settings, configures logging and creates the Workspace at startup;
    drops the Workspace at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    logger.info(f"Starting DeFi IDE backend, projects in {settings.projects_dir}")
    initialize_workspace(settings)

    yield

    logger.info("Shutting down DeFi IDE backend")
    shutdown_workspace()


app = FastAPI(
    title="DeFi IDE Backend",
    description="Project files, protocol templates and version control for the DeFi IDE",
    version=VERSION,
    lifespan=lifespan,
)

# Order matters: specific exceptions before general ones
app.add_exception_handler(NotFoundError, not_found_handler)
app.add_exception_handler(InvalidStateError, invalid_state_handler)
app.add_exception_handler(TemplateLoadError, template_load_error_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(filesystem_routes.router)
app.include_router(template_routes.router)
app.include_router(version_control_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message."""
    return {
        "message": "Welcome to the DeFi IDE backend",
        "version": VERSION,
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run("main:app", host=settings.host, port=settings.port)
