"""Health check response models."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Health status string (e.g., "healthy").
        version: Package version.
        consultation_state: Stored lifecycle state of the consultation.
        current_height: Logical height reported by the clock source.
    """

    status: str
    version: str
    consultation_state: str
    current_height: int
