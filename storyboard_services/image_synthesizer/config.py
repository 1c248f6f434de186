"""
Configuration models for the image synthesizer service.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


DEFAULT_STYLE_TEMPLATE = (
    "Create a colorful, child-friendly illustration for a children's storybook: "
    "{description}. Style: vibrant, warm, illustrated children's book art."
)


class SynthesisConfig(BaseModel):
    """Configuration for the per-scene image generation call."""
    model: str = Field("google/gemini-2.5-flash-image", description="Image-capable model")
    style_template: str = Field(DEFAULT_STYLE_TEMPLATE, description="Prompt template, formatted with {description}")
    modalities: List[str] = Field(default_factory=lambda: ["image", "text"], description="Requested output modalities")
    timeout: Optional[float] = Field(None, description="Request timeout in seconds, None for transport default")
