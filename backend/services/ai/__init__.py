"""
Text generation provider selection.
"""

from shared.config import config as service_config
from shared.utils import setup_logging

from .drivers import AzureOpenAIGenerationDriver, OpenAIGenerationDriver, TextGenerationDriver

logger = setup_logging("ai-drivers")


def build_generation_driver() -> TextGenerationDriver | None:
    """
    Create the driver for the configured provider.

    Returns:
        A ready driver, or None when no credential is configured
    """
    try:
        if service_config.get("use_azure_openai", False):
            return AzureOpenAIGenerationDriver()
        if not service_config.get("openai_api_key"):
            logger.info("OpenAI API key not configured; generation will use fallback content")
            return None
        return OpenAIGenerationDriver()
    except ValueError as e:
        logger.warning(f"Failed to initialize generation driver: {e}")
        return None


__all__ = ["build_generation_driver", "TextGenerationDriver"]
