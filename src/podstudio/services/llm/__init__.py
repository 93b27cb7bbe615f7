from typing import Optional
from .base import LLMService
from .openai_service import OpenAIService
from .prompts import PromptBuilder
from .turn_generator import TurnGenerator

def create_llm_service(
    api_key: Optional[str],
    model_name: Optional[str] = None,
    **kwargs
) -> LLMService:
    """Create the LLM service used for AI turns."""
    if not api_key:
        raise ValueError("OpenAI API key required")
    return OpenAIService(api_key=api_key, model=model_name or "gpt-4o", **kwargs)

__all__ = [
    'LLMService',
    'OpenAIService',
    'PromptBuilder',
    'TurnGenerator',
    'create_llm_service'
]
