from abc import ABC, abstractmethod


class TextGenerationDriver(ABC):
    """Abstract base class for text generation drivers."""

    provider: str = "unknown"

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        """Run one chat completion and return the reply text ("" when empty)."""
        pass
