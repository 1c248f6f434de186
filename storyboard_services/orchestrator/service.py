"""
Storyboard orchestrator service implementation.

Extracts scenes from a story, illustrates each one independently and keeps
the scenes whose illustration succeeded.
"""

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Union

from ..base import BaseService, run_service
from ..errors import ExtractionError, InvalidInput, SynthesisError
from ..image_synthesizer import ImageSynthesizer
from ..models import IllustratedScene, Scene, StoryboardResult, SynthesisFailure
from ..scene_extractor import SceneExtractor
from .config import StoryboardConfig


SceneOutcome = Union[IllustratedScene, SynthesisFailure]


class StoryboardOrchestrator(BaseService):
    """Builds an illustrated storyboard from story text."""

    def __init__(self, config, api_key: Optional[str] = None,
                 extractor: Optional[SceneExtractor] = None,
                 synthesizer: Optional[ImageSynthesizer] = None, **kwargs):
        """Initialize the orchestrator.

        The credential is only needed when a collaborator has to be built
        here. When neither ``api_key`` nor both collaborators are given it is
        read from the environment variable named in the gateway config.
        """
        super().__init__(config, **kwargs)

        if extractor is None or synthesizer is None:
            if api_key is None:
                api_key = self.config.gateway.resolve_api_key()
            url = self.config.gateway.url
            extractor = extractor or SceneExtractor(self.config.extraction, url, api_key)
            synthesizer = synthesizer or ImageSynthesizer(self.config.synthesis, url, api_key)

        self.extractor = extractor
        self.synthesizer = synthesizer

    def _create_config(self, config_data: dict) -> StoryboardConfig:
        """Create configuration object from data."""
        return StoryboardConfig(**config_data)

    def _illustrate(self, scene: Scene) -> SceneOutcome:
        """Synthesize the image for one scene, turning failure into a value."""
        self.logger.info(f"Generating image for scene {scene.sequence}...")
        try:
            image_url = self.synthesizer.synthesize(scene.description)
        except SynthesisError as e:
            self.logger.error(f"Image generation error for scene {scene.sequence}: {e}")
            return SynthesisFailure(scene=scene, error=str(e))

        self.logger.info(f"Successfully generated image for scene {scene.sequence}")
        return IllustratedScene(sequence=scene.sequence, description=scene.description, image_url=image_url)

    def _illustrate_all(self, scenes: List[Scene]) -> List[SceneOutcome]:
        """Illustrate every scene. Outcomes keep extraction order."""
        workers = min(self.config.orchestrator.max_workers, len(scenes))
        if workers <= 1:
            return [self._illustrate(scene) for scene in scenes]

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="scene") as executor:
            return list(executor.map(self._illustrate, scenes))

    def build(self, story: Optional[str]) -> StoryboardResult:
        """Build a storyboard.

        Raises:
            InvalidInput: the story is missing or blank.
            ExtractionError: extraction failed or found no scenes.
        """
        if not isinstance(story, str) or not story.strip():
            raise InvalidInput("Story text is required")

        scenes = self.extractor.extract(story)
        if not scenes:
            raise ExtractionError("No scenes extracted from story")

        self.logger.info(f"Extracted {len(scenes)} scenes, generating images...")
        outcomes = self._illustrate_all(scenes)

        storyboard = [outcome for outcome in outcomes if isinstance(outcome, IllustratedScene)]
        failures = [outcome for outcome in outcomes if isinstance(outcome, SynthesisFailure)]

        self.logger.info(f"Generated {len(storyboard)} storyboard images")
        if failures:
            self.logger.warning(
                f"Skipped {len(failures)} scenes without images: "
                f"{[failure.scene.sequence for failure in failures]}"
            )

        return StoryboardResult(storyboard=storyboard, failures=failures, extracted_count=len(scenes))

    def validate_inputs(self) -> bool:
        """Validate that the story file exists."""
        input_file = Path(self.config.io.input_file)
        if not input_file.exists():
            self.logger.error(f"Input file not found: {input_file}")
            return False
        return True

    def validate_outputs(self) -> bool:
        """Validate that the storyboard file was written."""
        output_file = Path(self.config.io.output_file)
        if not output_file.exists():
            self.logger.error(f"Output file not created: {output_file}")
            return False

        try:
            with open(output_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except ValueError as e:
            self.logger.error(f"Output validation failed: {e}")
            return False

        return isinstance(data, dict) and isinstance(data.get("storyboard"), list)

    def _load_story(self) -> str:
        with open(self.config.io.input_file, 'r', encoding='utf-8') as f:
            return f.read()

    def _save_storyboard(self, result: StoryboardResult) -> None:
        output_path = Path(self.config.io.output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(result.to_payload(), f, indent=2)

    def run(self) -> int:
        """Run the pipeline once on the configured story file."""
        try:
            self.logger.info("Starting storyboard orchestrator")

            if not self.validate_inputs():
                return 1

            story = self._load_story()
            self.logger.info(f"Loaded story: {len(story)} characters")

            result = self.build(story)
            self._save_storyboard(result)

            if not self.validate_outputs():
                return 1

            self.logger.info(f"Storyboard saved to {self.config.io.output_file}")
            return 0

        except Exception as e:
            self.logger.error(f"Storyboard orchestrator failed: {e}")
            return 1


def main():
    """Entry point for the storyboard command line run."""
    run_service(StoryboardOrchestrator, "Storyboard Generator")


if __name__ == "__main__":
    main()
