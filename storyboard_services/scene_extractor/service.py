"""
Scene extractor service implementation.

Asks a language model for the key visual scenes of a story through a forced
function call and validates the structured reply.
"""

import json
import logging
from typing import Any, Dict, List

import jsonschema
import requests
from pydantic import ValidationError

from ..errors import ExtractionError
from ..models import Scene
from .config import ExtractionConfig


TOOL_NAME = "extract_scenes"

SCENES_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "scenes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "description": {
                        "type": "string",
                        "description": "Detailed visual description for image generation, "
                                       "including characters, setting, mood, and action"
                    },
                    "sequence": {
                        "type": "integer",
                        "minimum": 1,
                        "description": "Scene number in sequence"
                    }
                },
                "required": ["description", "sequence"]
            }
        }
    },
    "required": ["scenes"]
}


class SceneExtractor:
    """Extracts an ordered list of scenes from story text."""

    def __init__(self, config: ExtractionConfig, api_url: str, api_key: str):
        self.config = config
        self.api_url = api_url
        self.api_key = api_key
        self.logger = logging.getLogger(self.__class__.__name__)

    def _build_payload(self, story: str) -> Dict[str, Any]:
        """Build the chat completion request forcing the extract_scenes tool."""
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": self.config.system_prompt},
                {"role": "user", "content": self.config.user_template.format(story=story)}
            ],
            "tools": [
                {
                    "type": "function",
                    "function": {
                        "name": TOOL_NAME,
                        "description": "Extract key visual scenes from a children's story",
                        "parameters": SCENES_SCHEMA
                    }
                }
            ],
            "tool_choice": {"type": "function", "function": {"name": TOOL_NAME}}
        }

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = requests.post(
                self.api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.config.timeout
            )
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Scene extraction request failed: {e}")
            raise ExtractionError(f"Failed to extract scenes: {e}") from e

        if not response.ok:
            self.logger.error(f"Scene extraction error: {response.status_code} {response.text}")
            raise ExtractionError(f"Failed to extract scenes: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ExtractionError("Scene extraction response is not valid JSON") from e

        self.logger.debug(f"Extraction response: {json.dumps(data)}")
        return data

    def _tool_arguments(self, data: Any) -> Any:
        """Pull the decoded arguments of the first tool call out of a completion."""
        try:
            tool_call = data["choices"][0]["message"]["tool_calls"][0]
            arguments = tool_call["function"]["arguments"]
        except (KeyError, IndexError, TypeError):
            raise ExtractionError("No scenes extracted from story")

        # Some gateways return arguments already decoded
        if isinstance(arguments, (dict, list)):
            return arguments

        try:
            return json.loads(arguments)
        except (TypeError, ValueError) as e:
            raise ExtractionError(f"Scene extraction returned malformed arguments: {e}") from e

    def _parse_scenes(self, arguments: Any) -> List[Scene]:
        """Validate tool arguments against the schema and convert them to scenes."""
        try:
            jsonschema.validate(arguments, SCENES_SCHEMA)
        except jsonschema.ValidationError as e:
            raise ExtractionError(f"Scene extraction returned an invalid payload: {e.message}") from e

        try:
            scenes = [Scene(**entry) for entry in arguments["scenes"]]
        except ValidationError as e:
            raise ExtractionError(f"Scene extraction returned an invalid scene: {e}") from e

        if not scenes:
            raise ExtractionError("No scenes extracted from story")

        sequences = [scene.sequence for scene in scenes]
        if len(set(sequences)) != len(sequences):
            raise ExtractionError(f"Scene extraction returned duplicate sequence numbers: {sequences}")

        return scenes

    def extract(self, story: str) -> List[Scene]:
        """Extract scenes from a story.

        Raises:
            ExtractionError: the upstream call failed, returned no structured
                payload, or returned zero scenes.
        """
        self.logger.info("Extracting key scenes from story...")
        data = self._post(self._build_payload(story))
        scenes = self._parse_scenes(self._tool_arguments(data))
        self.logger.info(f"Extracted {len(scenes)} scenes")
        return scenes
