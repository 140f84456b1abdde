"""
API response models.

Pydantic models for FastAPI response serialization and OpenAPI schema generation.
Request bodies are HTML form posts and are read as raw form parameters.
"""

from pydantic import BaseModel

GENERIC_ERROR = "an error occurred, try again later"


class IndexResponse(BaseModel):
    """Response model for the form landing endpoint."""

    message: str


class SubmissionResponse(BaseModel):
    """Response model for a form submission, accepted or not."""

    message: str
    detail: str | None = None


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
    registrations: int
