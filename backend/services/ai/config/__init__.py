"""Prompt configuration."""

from .config_loader import PromptConfig, load_prompt_config, prompt_config

__all__ = ["PromptConfig", "load_prompt_config", "prompt_config"]
