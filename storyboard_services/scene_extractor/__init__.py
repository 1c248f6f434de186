"""
scene_extractor service

Extracts the key visual scenes of a children's story using a structured-output LLM call.
"""

from .service import SceneExtractor
from .config import ExtractionConfig

__all__ = ["SceneExtractor", "ExtractionConfig"]
