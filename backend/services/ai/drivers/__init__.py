"""Text generation driver implementations."""

from .azure_driver import AzureOpenAIGenerationDriver
from .base import TextGenerationDriver
from .openai_driver import OpenAIGenerationDriver

__all__ = [
    "TextGenerationDriver",
    "OpenAIGenerationDriver",
    "AzureOpenAIGenerationDriver",
]
