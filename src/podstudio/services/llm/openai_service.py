import asyncio
import functools
import logging
from typing import Optional
from openai import OpenAI, OpenAIError
from ...errors import GenerationError
from .base import LLMService

logger = logging.getLogger(__name__)

class OpenAIService(LLMService):
    """LLM service using the OpenAI chat completions API."""

    def __init__(self, api_key: str, model: str = "gpt-4o", top_p: float = 0.9, client=None):
        self.client = client or OpenAI(api_key=api_key)
        self.model = model
        self.top_p = top_p

    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        params = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "top_p": self.top_p,
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(
                None,
                functools.partial(self.client.chat.completions.create, **params)
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise GenerationError(f"OpenAI API call failed: {e}") from e

        if not response.choices or response.choices[0].message is None:
            raise GenerationError("Unexpected response format from OpenAI")
        return response.choices[0].message.content or ""
