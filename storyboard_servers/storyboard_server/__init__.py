"""
Storyboard server exposing the storyboard pipeline over HTTP.
"""

from .server import StoryboardServer

__all__ = ["StoryboardServer"]
