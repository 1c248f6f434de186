"""
Children's Story Storyboard Services

This package contains the pipeline stages that turn a story into an illustrated storyboard.
Each stage can be used on its own or driven together by the orchestrator.
"""

__version__ = "1.0.0"
