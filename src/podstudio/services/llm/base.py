from abc import ABC, abstractmethod
from typing import Optional
import logging

logger = logging.getLogger(__name__)

class LLMService(ABC):
    """Base class for LLM services."""

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None
    ) -> str:
        """Generate text from prompt."""
        pass

    def provider_name(self) -> str:
        """Get the name of the LLM provider."""
        return self.__class__.__name__.replace('Service', '')
