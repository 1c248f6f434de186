"""
orchestrator service

Drives scene extraction and per-scene image synthesis into a storyboard.
"""

from .service import StoryboardOrchestrator
from .config import StoryboardConfig

__all__ = ["StoryboardOrchestrator", "StoryboardConfig"]
