"""
Pydantic models for the storyboard server API.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from storyboard_services.models import IllustratedScene


class StoryboardRequest(BaseModel):
    """Request model for storyboard generation."""
    story: Optional[str] = Field(None, description="Children's story text")


class StoryboardResponse(BaseModel):
    """Response model for a generated storyboard."""
    storyboard: List[IllustratedScene] = Field(..., description="Illustrated scenes in extraction order")


class ErrorResponse(BaseModel):
    """Error response body."""
    error: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    credential_configured: bool = Field(..., description="Whether the upstream credential is set")
