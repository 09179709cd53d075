"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from src.config.consultation_config import ConsultationConfig
from src.infrastructure.observability import configure_structlog


def configure_logging_from_config(config: ConsultationConfig) -> None:
    """Configure structlog using the consultation config's log environment."""
    configure_structlog(environment=config.log_environment)


__all__ = ["configure_logging_from_config"]
