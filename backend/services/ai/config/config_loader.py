"""
Configuration loader for pitch deck prompts.
Handles loading and validation of the YAML prompt file.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from shared.config import config as service_config

logger = logging.getLogger(__name__)

FALLBACK_SLIDE_COUNT = 10


class PromptConfig:
    """Configuration manager for generation and chat prompts."""

    def __init__(self, config_path: str | None = None):
        if config_path is None:
            config_path = os.path.join(os.path.dirname(__file__), "prompts.yaml")

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, encoding="utf-8") as file:
                config = yaml.safe_load(file) or {}
                logger.info(f"Loaded prompt configuration from {self.config_path}")
                return config
        except FileNotFoundError:
            logger.error(f"Prompt configuration file not found: {self.config_path}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML prompt configuration: {e}")
            raise

    def _section(self, name: str) -> dict[str, Any]:
        return self._config.get(name, {}) or {}

    # Generation
    def get_generation_system_prompt(self) -> str:
        return self._section("generation").get("system_prompt", "")

    def get_generation_user_template(self) -> str:
        return self._section("generation").get("user_template", "{prompt}")

    def get_default_prompt(self) -> str:
        return self._section("generation").get("default_prompt", "your business idea")

    def get_preview_length(self) -> int:
        return int(self._section("generation").get("preview_length", 50))

    def get_fallback_slides(self) -> list[dict[str, str]]:
        return list(self._section("generation").get("fallback_slides", []))

    # Chat
    def get_chat_system_prompt(self) -> str:
        return self._section("chat").get("system_prompt", "")

    def get_chat_context_template(self) -> str:
        return self._section("chat").get("context_template", "{context}\n\n{prompt}")

    def get_chat_slide_template(self) -> str:
        return self._section("chat").get("slide_template", "{slide_json}\n\n{prompt}")

    def get_trouble_reply(self) -> str:
        return self._section("chat").get(
            "trouble_reply", "I'm having trouble processing your request. Please try again."
        )

    def get_model_params(self, section: str) -> dict[str, Any]:
        """Get temperature/max_tokens for 'generation' or 'chat'."""
        params = self._section(section).get("model_params", {}) or {}
        return {
            "temperature": float(params.get("temperature", 0.7)),
            "max_tokens": int(params.get("max_tokens", 2000)),
        }

    def validate_config(self) -> bool:
        """Validate the configuration structure."""
        if not self.get_generation_system_prompt() or not self.get_chat_system_prompt():
            logger.error("Missing generation or chat system prompt")
            return False

        fallback = self.get_fallback_slides()
        if len(fallback) != FALLBACK_SLIDE_COUNT:
            logger.error(
                f"Expected {FALLBACK_SLIDE_COUNT} fallback slides, found {len(fallback)}"
            )
            return False
        for index, slide in enumerate(fallback, 1):
            if not isinstance(slide, dict) or "title" not in slide or "content" not in slide:
                logger.error(f"Fallback slide {index} must define title and content")
                return False
        return True


def load_prompt_config(config_path: str | None = None) -> PromptConfig:
    """Load and validate the prompt configuration."""
    prompt_config = PromptConfig(config_path)
    if not prompt_config.validate_config():
        raise ValueError(f"Invalid prompt configuration: {prompt_config.config_path}")
    return prompt_config


# Global configuration instance
prompt_config = load_prompt_config(service_config.get("prompt_config_path"))
