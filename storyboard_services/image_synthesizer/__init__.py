"""
Image synthesizer service for turning scene descriptions into storybook illustrations.
"""

from .service import ImageSynthesizer
from .config import SynthesisConfig

__all__ = ["ImageSynthesizer", "SynthesisConfig"]
