"""
Configuration models for the storyboard orchestrator.
"""

import os
from typing import List, Optional
from pydantic import BaseModel, Field

from ..base import ServiceConfig
from ..errors import ConfigurationError
from ..image_synthesizer.config import SynthesisConfig
from ..scene_extractor.config import ExtractionConfig


class GatewayConfig(BaseModel):
    """Upstream chat-completions gateway shared by both stages."""
    url: str = Field("https://ai.gateway.lovable.dev/v1/chat/completions", description="Chat completions endpoint")
    api_key_env: str = Field("LOVABLE_API_KEY", description="Environment variable holding the bearer credential")

    def resolve_api_key(self) -> str:
        """Read the credential from the environment."""
        api_key = os.getenv(self.api_key_env)
        if not api_key:
            raise ConfigurationError(f"{self.api_key_env} is not configured")
        return api_key


class OrchestratorConfig(BaseModel):
    """Fan-out settings for per-scene image synthesis."""
    max_workers: int = Field(4, ge=1, description="Concurrent image requests, 1 for sequential")


class ServerConfig(BaseModel):
    """HTTP server settings."""
    host: str = Field("0.0.0.0", description="Bind address")
    port: int = Field(8000, description="Port to run the server on")
    allow_headers: List[str] = Field(
        default_factory=lambda: ["authorization", "x-client-info", "apikey", "content-type"],
        description="Headers allowed for cross-origin requests"
    )


class IOConfig(BaseModel):
    """Input/Output configuration for command-line runs."""
    input_file: str = Field("data/story.txt", description="Input story text file")
    output_file: str = Field("out/storyboard.json", description="Output storyboard file")


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field("INFO", description="Root log level")
    log_dir: Optional[str] = Field("logs", description="Directory for dated log files, None to disable")


class StoryboardConfig(ServiceConfig):
    """Main configuration for the storyboard pipeline."""
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    synthesis: SynthesisConfig = Field(default_factory=SynthesisConfig)
    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    io: IOConfig = Field(default_factory=IOConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
