"""Schema for the health check endpoint."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    upstream_configured: bool = Field(
        ..., description="Whether STT_API_ENDPOINT is set; the URL itself is never exposed."
    )
