"""
FastAPI server exposing storyboard generation over HTTP.
"""

import argparse
import logging
from typing import Dict, Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from storyboard_services.base import load_yaml_config, setup_logging
from storyboard_services.errors import ConfigurationError, ExtractionError, InvalidInput
from storyboard_services.orchestrator import StoryboardConfig, StoryboardOrchestrator

from .models import ErrorResponse, HealthResponse, StoryboardRequest, StoryboardResponse


STORY_REQUIRED = "Story text is required"


class StoryboardServer:
    """FastAPI server for the storyboard pipeline."""

    def __init__(self, config: Optional[StoryboardConfig] = None):
        """Initialize the storyboard server."""
        self.config = config or StoryboardConfig()
        self.logger = logging.getLogger(__name__)
        self.cors_headers: Dict[str, str] = {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Headers": ", ".join(self.config.server.allow_headers),
        }

        # Create FastAPI app
        self.app = FastAPI(
            title="Storyboard Server",
            description="Turns children's stories into illustrated storyboards",
            version="1.0.0"
        )

        # Setup routes
        self._setup_routes()

    def _json(self, content: dict, status_code: int = 200) -> JSONResponse:
        return JSONResponse(content=content, status_code=status_code, headers=self.cors_headers)

    def _error(self, message: str, status_code: int) -> JSONResponse:
        return self._json(ErrorResponse(error=message).model_dump(), status_code=status_code)

    async def _read_story(self, request: Request) -> str:
        """Parse the request body and return the trimmed-non-empty story."""
        try:
            payload = await request.json()
            story = StoryboardRequest.model_validate(payload).story
        except (ValueError, ValidationError):
            raise InvalidInput(STORY_REQUIRED)

        if not story or not story.strip():
            raise InvalidInput(STORY_REQUIRED)
        return story

    def _create_orchestrator(self, api_key: str) -> StoryboardOrchestrator:
        """Build a fresh orchestrator for one request."""
        return StoryboardOrchestrator(self.config, api_key=api_key)

    def _setup_routes(self):
        """Setup FastAPI routes."""

        @self.app.get("/health", response_model=HealthResponse)
        async def health_check():
            """Health check endpoint."""
            try:
                self.config.gateway.resolve_api_key()
                configured = True
            except ConfigurationError:
                configured = False
            return self._json(HealthResponse(status="healthy", credential_configured=configured).model_dump())

        @self.app.options("/generate-storyboard")
        async def generate_storyboard_preflight():
            """Answer cross-origin preflight requests with the fixed header set."""
            return Response(status_code=200, headers=self.cors_headers)

        @self.app.post(
            "/generate-storyboard",
            response_model=StoryboardResponse,
            responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
        )
        async def generate_storyboard(request: Request):
            """Generate an illustrated storyboard from a story."""
            try:
                story = await self._read_story(request)
                api_key = self.config.gateway.resolve_api_key()
                orchestrator = self._create_orchestrator(api_key)
                result = await run_in_threadpool(orchestrator.build, story)

            except InvalidInput as e:
                return self._error(str(e), 400)

            except (ConfigurationError, ExtractionError) as e:
                self.logger.error(f"Error in generate-storyboard: {e}")
                return self._error(str(e), 500)

            except Exception as e:
                self.logger.exception("Unexpected error in generate-storyboard")
                return self._error(str(e) or "An unexpected error occurred", 500)

            return self._json(result.to_payload())

    def run(self):
        """Run the FastAPI server."""
        uvicorn.run(
            self.app,
            host=self.config.server.host,
            port=self.config.server.port,
            log_level=self.config.logging.level.lower()
        )


def main():
    """Entry point for the storyboard server."""
    parser = argparse.ArgumentParser(description="Storyboard Server")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration YAML file"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Address to bind"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to run the server on"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    config_data = load_yaml_config(args.config) if args.config else {}
    config = StoryboardConfig(**config_data)
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port
    if args.verbose:
        config.logging.level = "DEBUG"

    setup_logging("StoryboardServer", level=config.logging.level, log_dir=config.logging.log_dir)

    server = StoryboardServer(config)
    server.run()


if __name__ == "__main__":
    main()
