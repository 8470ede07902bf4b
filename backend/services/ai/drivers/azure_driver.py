"""Azure OpenAI driver for text generation using v1 API pattern."""

from __future__ import annotations

from shared.openai_client import create_azure_openai_client, get_azure_deployment_name

from .base import TextGenerationDriver


class AzureOpenAIGenerationDriver(TextGenerationDriver):
    """Azure OpenAI implementation following Microsoft's v1 API pattern."""

    provider = "azure_openai"

    def __init__(self, timeout: float | None = None):
        """Initialize Azure OpenAI client with v1 API endpoint."""
        self.client = create_azure_openai_client(timeout=timeout)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        # Azure addresses models by deployment name
        deployment = get_azure_deployment_name()

        response = await self.client.chat.completions.create(
            model=deployment,
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
