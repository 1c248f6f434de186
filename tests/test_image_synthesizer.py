"""
Unit tests for the image synthesizer service.
"""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from storyboard_services.errors import SynthesisError
from storyboard_services.image_synthesizer import ImageSynthesizer, SynthesisConfig


API_URL = "https://gateway.test/v1/chat/completions"


def make_response(body, status_code=200):
    """Build a fake requests response."""
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = json.dumps(body)
    response.json.return_value = body
    return response


def image_body(*urls):
    """Wrap image URLs in a chat completion body."""
    return {
        "choices": [{
            "message": {
                "content": "Here is your illustration.",
                "images": [{"type": "image_url", "image_url": {"url": url}} for url in urls]
            }
        }]
    }


class TestImageSynthesizer:
    """Test cases for ImageSynthesizer."""

    @pytest.fixture
    def synthesizer(self):
        """Create a synthesizer with a short timeout."""
        return ImageSynthesizer(SynthesisConfig(timeout=15), API_URL, "test-key")

    @patch('storyboard_services.image_synthesizer.service.requests.post')
    def test_prompt_uses_style_template(self, mock_post, synthesizer):
        """Test that the description is embedded in the storybook style template."""
        mock_post.return_value = make_response(image_body("data:image/png;base64,AAAA"))

        synthesizer.synthesize("rabbit meets fox in forest clearing")

        args, kwargs = mock_post.call_args
        assert args[0] == API_URL
        assert kwargs["headers"]["Authorization"] == "Bearer test-key"
        assert kwargs["timeout"] == 15

        payload = kwargs["json"]
        assert payload["model"] == "google/gemini-2.5-flash-image"
        assert payload["modalities"] == ["image", "text"]
        prompt = payload["messages"][0]["content"]
        assert prompt.startswith("Create a colorful, child-friendly illustration for a children's storybook: ")
        assert "rabbit meets fox in forest clearing" in prompt
        assert prompt.endswith("Style: vibrant, warm, illustrated children's book art.")

    @patch('storyboard_services.image_synthesizer.service.requests.post')
    def test_returns_first_image_of_first_choice(self, mock_post, synthesizer):
        """Test that exactly one image reference is returned."""
        mock_post.return_value = make_response(image_body("https://img.test/1.png", "https://img.test/2.png"))

        assert synthesizer.synthesize("a fox") == "https://img.test/1.png"

    @patch('storyboard_services.image_synthesizer.service.requests.post')
    def test_http_error_raises(self, mock_post, synthesizer):
        """Test that a non-2xx reply is a synthesis failure."""
        mock_post.return_value = make_response({"error": "rate limited"}, status_code=429)

        with pytest.raises(SynthesisError, match="429"):
            synthesizer.synthesize("a fox")

    @patch('storyboard_services.image_synthesizer.service.requests.post')
    def test_timeout_raises(self, mock_post, synthesizer):
        """Test that a transport timeout is a synthesis failure."""
        mock_post.side_effect = requests.exceptions.Timeout("timed out")

        with pytest.raises(SynthesisError):
            synthesizer.synthesize("a fox")

    @pytest.mark.parametrize("body", [
        {"choices": []},
        {"choices": [{"message": {"content": "I cannot draw that."}}]},
        {"choices": [{"message": {"images": []}}]},
        {"choices": [{"message": {"images": [{"image_url": {}}]}}]},
        {"choices": [{"message": {"images": [{"image_url": {"url": ""}}]}}]},
        {"choices": [{"message": {"images": [{"image_url": {"url": 42}}]}}]},
    ])
    @patch('storyboard_services.image_synthesizer.service.requests.post')
    def test_missing_image_raises(self, mock_post, synthesizer, body):
        """Test that any reply without an image reference is a failure."""
        mock_post.return_value = make_response(body)

        with pytest.raises(SynthesisError):
            synthesizer.synthesize("a fox")

    @patch('storyboard_services.image_synthesizer.service.requests.post')
    def test_invalid_json_raises(self, mock_post, synthesizer):
        """Test that an undecodable reply is a failure."""
        response = make_response({})
        response.json.side_effect = ValueError("Expecting value")
        mock_post.return_value = response

        with pytest.raises(SynthesisError):
            synthesizer.synthesize("a fox")
