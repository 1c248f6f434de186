"""
Exception taxonomy for the storyboard pipeline.
"""


class StoryboardError(Exception):
    """Base class for all storyboard pipeline errors."""


class InvalidInput(StoryboardError):
    """The incoming story is missing or blank."""


class ConfigurationError(StoryboardError):
    """Configuration is unusable, e.g. the upstream credential is not set."""


class ExtractionError(StoryboardError):
    """Scene extraction failed or produced no scenes. Aborts the whole request."""


class SynthesisError(StoryboardError):
    """Image synthesis failed for a single scene. Contained by the orchestrator."""
