"""
Servers package for the storyboard pipeline.

This package contains FastAPI servers that expose the storyboard services to browser clients.
"""

__version__ = "1.0.0"
