"""
Image synthesizer service implementation.

Generates one storybook illustration per scene description.
"""

import logging
from typing import Any, Dict

import requests

from ..errors import SynthesisError
from .config import SynthesisConfig


class ImageSynthesizer:
    """Requests a single illustration for a scene description."""

    def __init__(self, config: SynthesisConfig, api_url: str, api_key: str):
        self.config = config
        self.api_url = api_url
        self.api_key = api_key
        self.logger = logging.getLogger(self.__class__.__name__)

    def _build_prompt(self, description: str) -> str:
        """Embed the description in the fixed style template."""
        return self.config.style_template.format(description=description)

    def _build_payload(self, description: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [
                {"role": "user", "content": self._build_prompt(description)}
            ],
            "modalities": list(self.config.modalities)
        }

    def _extract_image_url(self, data: Any) -> str:
        """Return the first image URL of the first choice."""
        try:
            image_url = data["choices"][0]["message"]["images"][0]["image_url"]["url"]
        except (KeyError, IndexError, TypeError):
            raise SynthesisError("Image response contained no image")

        if not isinstance(image_url, str) or not image_url:
            raise SynthesisError("Image response contained an empty image reference")
        return image_url

    def synthesize(self, description: str) -> str:
        """Generate an illustration and return its image reference.

        Raises:
            SynthesisError: the upstream call failed or returned no image.
        """
        try:
            response = requests.post(
                self.api_url,
                json=self._build_payload(description),
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.config.timeout
            )
        except requests.exceptions.RequestException as e:
            raise SynthesisError(f"Image request failed: {e}") from e

        if not response.ok:
            raise SynthesisError(f"Image generation failed: {response.status_code} {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise SynthesisError("Image response is not valid JSON") from e

        return self._extract_image_url(data)
