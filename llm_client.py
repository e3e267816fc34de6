"""Fail-soft wrapper around the chat model."""
import logging
from langchain_core.language_models import BaseChatModel
from models import TextResult

logger = logging.getLogger("LLMClient")

PROMPT_ECHO_CHARS = 50


class GenerativeTextClient:
    """Submits one prompt and returns generated text.

    Never raises: a failed call returns placeholder text with ``degraded``
    set so thread composition can carry on. Retries are the caller's job.
    """

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

    def _placeholder(self, prompt: str) -> str:
        return f"Failed to generate content for: {prompt[:PROMPT_ECHO_CHARS]}..."

    async def complete(self, prompt: str) -> TextResult:
        logger.info("LLM prompt: %s", prompt)

        try:
            response = await self.llm.ainvoke(prompt)
        except Exception as e:
            logger.error("Generation degraded, LLM call failed: %s", str(e))
            return TextResult(text=self._placeholder(prompt), degraded=True, error=str(e))

        content = response.content if isinstance(response.content, str) else ""
        text = content.strip()
        if not text:
            logger.error("Generation degraded, LLM returned empty content")
            return TextResult(text=self._placeholder(prompt), degraded=True, error="Empty response")

        logger.info("LLM response: %s", text)
        return TextResult(text=text)
