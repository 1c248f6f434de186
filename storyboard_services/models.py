"""
Data models shared by the storyboard pipeline stages.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Scene(BaseModel):
    """One extracted narrative beat."""
    model_config = ConfigDict(frozen=True)

    sequence: int = Field(..., ge=1, description="Scene number as assigned by the extractor")
    description: str = Field(..., description="Visual description used for image generation")

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value


class IllustratedScene(Scene):
    """A scene paired with its generated image."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl", min_length=1, description="Reference to the generated image")


class SynthesisFailure(BaseModel):
    """Diagnostic record of a scene whose illustration could not be generated."""
    model_config = ConfigDict(frozen=True)

    scene: Scene
    error: str


class StoryboardResult(BaseModel):
    """Outcome of one orchestrator run.

    ``storyboard`` holds only the scenes that were illustrated, in extraction
    order. ``failures`` is for logging and tests and is never returned to
    HTTP callers.
    """
    model_config = ConfigDict(frozen=True)

    storyboard: List[IllustratedScene] = Field(default_factory=list)
    failures: List[SynthesisFailure] = Field(default_factory=list)
    extracted_count: int = Field(0, description="Number of scenes returned by the extractor")

    def to_payload(self) -> dict:
        """Serialize the storyboard the way callers receive it."""
        return {"storyboard": [scene.model_dump(by_alias=True) for scene in self.storyboard]}
