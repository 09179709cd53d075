"""Configuration module for the consultation core.

Available Configurations:
- ConsultationConfig: Creator identity, submission cap, logging mode
"""

from src.config.consultation_config import (
    DEFAULT_CONSULTATION_CONFIG,
    TEST_CONSULTATION_CONFIG,
    ConsultationConfig,
)

__all__ = [
    "ConsultationConfig",
    "DEFAULT_CONSULTATION_CONFIG",
    "TEST_CONSULTATION_CONFIG",
]
