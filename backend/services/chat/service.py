"""
Chat-driven slide editing.

The model reply is returned verbatim; a single JSON object embedded in it is
surfaced separately as a suggested field patch for the slide.
"""

import json
from typing import Any

from pydantic import BaseModel

from services.ai.config import PromptConfig, prompt_config
from services.ai.drivers import TextGenerationDriver
from shared.deck_models import SlideData
from shared.json_extraction import extract_json_object
from shared.utils import config, setup_logging

NO_RESPONSE_REPLY = "No response generated"


class ChatEditResult(BaseModel):
    edit: str
    context: str
    slide_updates: dict[str, Any] | None = None


def extend_context(context: str, prompt: str) -> str:
    """Append an instruction to the conversation so far."""
    if not context:
        return prompt
    return f"{context}\n{prompt}"


class ChatEditService:
    """Single-turn slide editor backed by the configured text model."""

    def __init__(
        self,
        driver: TextGenerationDriver | None = None,
        prompts: PromptConfig | None = None,
        logger=None,
        model: str | None = None,
    ):
        self.driver = driver
        self.prompts = prompts or prompt_config
        self.logger = logger or setup_logging("chat-service")
        self.model = model or config.get("openai_model", "gpt-4")

    def build_user_prompt(self, prompt: str, context: str, slide_data: SlideData | None) -> str:
        """
        Build the user instruction for one edit request.

        With a slide snapshot the instruction carries the slide as JSON;
        otherwise it carries only the conversation context.
        """
        if slide_data is None:
            return self.prompts.get_chat_context_template().format(context=context, prompt=prompt)

        slide_json = json.dumps(
            slide_data.model_dump(by_alias=True, exclude_none=True), indent=2, ensure_ascii=False
        )
        return self.prompts.get_chat_slide_template().format(
            context=context, slide_json=slide_json, prompt=prompt
        )

    async def chat_edit(
        self, prompt: str, context: str = "", slide_data: SlideData | None = None
    ) -> ChatEditResult:
        """Ask the model for suggestions on a slide. Never raises."""
        updated_context = extend_context(context, prompt)

        if self.driver is None:
            self.logger.warning("Chat edit requested but no generation provider is configured")
            return ChatEditResult(edit=self.prompts.get_trouble_reply(), context=updated_context)

        try:
            reply = await self.driver.complete(
                self.prompts.get_chat_system_prompt(),
                self.build_user_prompt(prompt, context, slide_data),
                model=self.model,
                **self.prompts.get_model_params("chat"),
            )
        except Exception as e:
            self.logger.error(f"Error in chat edit: {e!s}")
            return ChatEditResult(edit=self.prompts.get_trouble_reply(), context=updated_context)

        reply = reply or NO_RESPONSE_REPLY
        slide_updates = extract_json_object(reply)
        if slide_updates is None:
            self.logger.debug("No slide updates found in chat reply")

        return ChatEditResult(edit=reply, context=updated_context, slide_updates=slide_updates)
