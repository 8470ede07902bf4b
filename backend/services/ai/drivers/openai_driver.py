"""OpenAI driver for text generation using AsyncOpenAI."""

from __future__ import annotations

from shared.openai_client import create_openai_client

from .base import TextGenerationDriver


class OpenAIGenerationDriver(TextGenerationDriver):
    """Direct OpenAI implementation using AsyncOpenAI client."""

    provider = "openai"

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        """Initialize OpenAI client."""
        self.client = create_openai_client(api_key=api_key, timeout=timeout)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        response = await self.client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )

        if not response.choices:
            return ""
        content = response.choices[0].message.content
        if content is not None:
            return content.strip()
        return ""
