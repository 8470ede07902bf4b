"""
Pitch deck generation with deterministic fallback.

``PitchDeckGenerator.run`` never raises: every path ends in a non-empty list
of slides, either parsed from the model reply or synthesized from the
fallback templates in ``prompts.yaml``.
"""

from typing import Any

from pydantic import BaseModel

from services.ai.config import PromptConfig, prompt_config
from services.ai.drivers import TextGenerationDriver
from shared.deck_models import GeneratedSlide
from shared.json_extraction import extract_json_object
from shared.utils import config, is_blank, setup_logging, truncate_text

DEFAULT_PROJECT_TITLE = "Untitled Pitch Deck"
PROJECT_TITLE_LENGTH = 60
SLIDE_TITLE_LENGTH = 500


class DeckGenerationResult(BaseModel):
    """Slides plus how they were obtained."""

    slides: list[GeneratedSlide]
    used_fallback: bool = False
    fallback_reason: str | None = None


def derive_project_title(prompt: Any) -> str:
    """Title for a generated project: first line of the prompt, shortened."""
    if is_blank(prompt):
        return DEFAULT_PROJECT_TITLE
    first_line = next(line.strip() for line in prompt.strip().splitlines() if line.strip())
    return truncate_text(first_line, PROJECT_TITLE_LENGTH).rstrip()


class PitchDeckGenerator:
    """Turns a business idea into slide records through the configured model."""

    def __init__(
        self,
        driver: TextGenerationDriver | None = None,
        prompts: PromptConfig | None = None,
        logger=None,
        model: str | None = None,
    ):
        self.driver = driver
        self.prompts = prompts or prompt_config
        self.logger = logger or setup_logging("generation-service")
        self.model = model or config.get("openai_model", "gpt-4")

    def normalize_prompt(self, prompt: Any) -> str:
        """Return the stripped prompt, or the default idea for unusable input."""
        if is_blank(prompt):
            return self.prompts.get_default_prompt()
        return prompt.strip()

    def build_prompts(self, prompt: str) -> tuple[str, str]:
        """Return the (system, user) instruction pair for a prompt."""
        system_prompt = self.prompts.get_generation_system_prompt()
        user_prompt = self.prompts.get_generation_user_template().format(prompt=prompt)
        return system_prompt, user_prompt

    def fallback_deck(self, prompt: Any) -> list[GeneratedSlide]:
        """Synthesize the fixed ten-slide deck for a prompt."""
        if is_blank(prompt):
            preview = self.prompts.get_default_prompt()
        else:
            preview = truncate_text(prompt, self.prompts.get_preview_length())

        return [
            GeneratedSlide(
                position=position,
                title=template["title"],
                content=template["content"].format(preview=preview),
            )
            for position, template in enumerate(self.prompts.get_fallback_slides(), 1)
        ]

    @staticmethod
    def validate_deck(payload: Any) -> list[GeneratedSlide] | None:
        """
        Check a parsed reply against the ``{"slides": [...]}`` contract.

        Returns:
            The slides in reply order, or None if any element is malformed,
            a title is too long to store, or the list is empty
        """
        if not isinstance(payload, dict):
            return None
        slides = payload.get("slides")
        if not isinstance(slides, list) or not slides:
            return None

        validated = []
        for item in slides:
            if not isinstance(item, dict):
                return None
            position = item.get("position")
            if isinstance(position, bool) or not isinstance(position, (int, float)):
                return None
            if not isinstance(item.get("title"), str) or not isinstance(item.get("content"), str):
                return None
            if len(item["title"]) > SLIDE_TITLE_LENGTH:
                return None
            validated.append(
                GeneratedSlide(position=position, title=item["title"], content=item["content"])
            )
        return validated

    def _fallback(self, prompt: Any, reason: str) -> DeckGenerationResult:
        self.logger.info(f"Using fallback slides ({reason})")
        return DeckGenerationResult(
            slides=self.fallback_deck(prompt), used_fallback=True, fallback_reason=reason
        )

    async def run(self, prompt: Any) -> DeckGenerationResult:
        """Generate slides for a prompt, falling back on any failure."""
        if is_blank(prompt):
            self.logger.info("Invalid prompt provided, substituting default")
            return self._fallback(None, "invalid_prompt")

        if self.driver is None:
            return self._fallback(prompt, "no_credential")

        try:
            system_prompt, user_prompt = self.build_prompts(self.normalize_prompt(prompt))
            params = self.prompts.get_model_params("generation")
            self.logger.info(f"Requesting pitch deck from {self.driver.provider} ({self.model})")
            reply = await self.driver.complete(
                system_prompt, user_prompt, model=self.model, **params
            )
        except Exception as e:
            self.logger.error(f"Pitch deck generation call failed: {e!s}")
            return self._fallback(prompt, "provider_error")

        if not reply or not reply.strip():
            return self._fallback(prompt, "empty_response")

        payload = extract_json_object(reply)
        if payload is None:
            self.logger.warning("No single JSON object found in model reply")
            return self._fallback(prompt, "unparseable_response")

        slides = self.validate_deck(payload)
        if slides is None:
            self.logger.warning("Model reply failed slide validation")
            return self._fallback(prompt, "invalid_structure")

        self.logger.info(f"Returning {len(slides)} generated slides")
        return DeckGenerationResult(slides=slides)

    async def generate(self, prompt: Any) -> list[GeneratedSlide]:
        """Generate slides for a prompt; see ``run``."""
        result = await self.run(prompt)
        return result.slides
