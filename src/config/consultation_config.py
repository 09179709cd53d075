"""Consultation configuration.

This module defines configuration for a consultation instance with
environment variable overrides for deployment.

Environment Variables:
- CONSULTATION_CREATOR: Identity allowed to run creator-only actions
  (default: "creator")
- CONSULTATION_MAX_SUBMISSIONS: Submission cap per activation (default: 1000)
- CONSULTATION_LOG_ENV: "production" for JSON logs, anything else for
  console logs (default: "production")
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from src.domain.models.consultation import DEFAULT_MAX_SUBMISSIONS


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class ConsultationConfig:
    """Configuration for a consultation instance.

    Attributes:
        creator: Identity allowed to initialize, close and fund the
                consultation. Default: "creator".
        max_submissions: Submission cap applied to each activation.
                        Default: 1000.
        log_environment: Logging mode passed to configure_structlog().
                        Default: "production" (JSON output).
    """

    creator: str = "creator"
    max_submissions: int = DEFAULT_MAX_SUBMISSIONS
    log_environment: str = "production"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.creator:
            raise ValueError("creator must be a non-empty identity")
        if self.max_submissions < 1:
            raise ValueError(
                f"max_submissions must be positive, got {self.max_submissions}"
            )

    @classmethod
    def from_environment(cls) -> "ConsultationConfig":
        """Create config from environment variables with defaults.

        Returns:
            ConsultationConfig with values from environment or defaults.
        """
        return cls(
            creator=os.environ.get("CONSULTATION_CREATOR", "creator"),
            max_submissions=_get_int_env(
                "CONSULTATION_MAX_SUBMISSIONS", DEFAULT_MAX_SUBMISSIONS
            ),
            log_environment=os.environ.get("CONSULTATION_LOG_ENV", "production"),
        )


# Pre-defined configurations

# Default production config
DEFAULT_CONSULTATION_CONFIG = ConsultationConfig()

# Testing config with a small cap for capacity tests
TEST_CONSULTATION_CONFIG = ConsultationConfig(
    creator="ST1TEST",
    max_submissions=3,
    log_environment="development",
)
