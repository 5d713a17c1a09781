"""
OpenAI provider implementation.
"""
import logging
from typing import Optional, Dict
from openai import OpenAI, OpenAIError

from covercraft.core import config
from covercraft.llm.provider import LLMProvider, LLMProviderError, LLMResponse

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """OpenAI provider using the official OpenAI SDK."""

    def __init__(self, api_key: Optional[str] = None, client: Optional[OpenAI] = None):
        self.api_key = api_key or config.OPENAI_API_KEY
        self._client = client

    @property
    def client(self) -> OpenAI:
        # Built on first use so the app starts without a key configured
        if self._client is None:
            if not self.api_key:
                raise LLMProviderError("OPENAI_API_KEY not configured")
            self._client = OpenAI(api_key=self.api_key)
            logger.info("OpenAI client initialized")
        return self._client

    def chat(
        self,
        messages: list[Dict[str, str]],
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Generate a chat completion. One request, no retries."""
        client = self.client
        try:
            response = client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens or 1000,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API error: {e}", exc_info=True)
            raise LLMProviderError(str(e)) from e

        try:
            choice = response.choices[0]
            content = choice.message.content
        except (AttributeError, IndexError, TypeError) as e:
            logger.error(f"Malformed completion body: {e}")
            raise LLMProviderError("Malformed completion response") from e

        if content is None:
            raise LLMProviderError("Completion returned no content")

        usage = getattr(response, "usage", None)
        return LLMResponse(
            content=content,
            tokens_in=getattr(usage, "prompt_tokens", 0) or 0,
            tokens_out=getattr(usage, "completion_tokens", 0) or 0,
            model=model,
            metadata={"finish_reason": getattr(choice, "finish_reason", None)},
        )


_provider: Optional[OpenAIProvider] = None


def get_llm_provider() -> LLMProvider:
    """FastAPI dependency returning the process-wide OpenAI provider."""
    global _provider
    if _provider is None:
        _provider = OpenAIProvider()
    return _provider
