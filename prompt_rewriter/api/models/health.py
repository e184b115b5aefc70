"""Health check models."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy", description="Service health status")
    version: str = Field(default="1.0.0", description="API version")
    model: str = Field(..., description="Completion model")
    llm_configured: bool = Field(..., description="Completion provider credential present")
    search_configured: bool = Field(..., description="Search provider credential present")
