"""FastAPI application entry point for the consultation core."""

from fastapi import FastAPI

from src import __version__
from src.api.middleware.logging_middleware import LoggingMiddleware
from src.api.routes.consultation import router as consultation_router
from src.api.routes.health import router as health_router
from src.bootstrap.consultation import get_consultation_config
from src.bootstrap.logging import configure_logging_from_config


def create_app() -> FastAPI:
    """Build the FastAPI application with logging and all routers."""
    configure_logging_from_config(get_consultation_config())

    application = FastAPI(
        title="Consultation Core API",
        description="Deadline-bounded public consultation ledger",
        version=__version__,
    )
    application.add_middleware(LoggingMiddleware)
    application.include_router(health_router)
    application.include_router(consultation_router)
    return application


app = create_app()
