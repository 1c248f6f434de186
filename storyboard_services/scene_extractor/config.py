"""
Configuration models for the scene extractor service.
"""

from typing import Optional
from pydantic import BaseModel, Field


DEFAULT_SYSTEM_PROMPT = (
    "You are a storyboard expert for children's stories. Extract 4-6 key visual scenes "
    "from the story that would make a great storyboard. For each scene, provide a detailed "
    "visual description suitable for image generation."
)

DEFAULT_USER_TEMPLATE = (
    "Extract key scenes from this children's story and describe them visually:\n\n{story}"
)


class ExtractionConfig(BaseModel):
    """Configuration for the scene extraction call."""
    model: str = Field("google/gemini-2.5-flash", description="Language model used for extraction")
    system_prompt: str = Field(DEFAULT_SYSTEM_PROMPT, description="System prompt fixing extraction policy")
    user_template: str = Field(DEFAULT_USER_TEMPLATE, description="User prompt template, formatted with {story}")
    timeout: Optional[float] = Field(None, description="Request timeout in seconds, None for transport default")
