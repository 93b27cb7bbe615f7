import logging
import uuid
from typing import Optional, Sequence
from ...errors import GenerationError
from ...models.conversation import ConversationTurn
from ...models.persona import Persona
from .base import LLMService
from .prompts import PromptBuilder

logger = logging.getLogger(__name__)

class TurnGenerator:
    """Writes the next utterance for an AI-controlled persona."""

    def __init__(self, llm: LLMService, temperature: float = 0.7, max_tokens: Optional[int] = 500):
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def next_turn(
        self,
        persona: Persona,
        history: Sequence[ConversationTurn],
        personas: Sequence[Persona]
    ) -> ConversationTurn:
        logger.info(f"Generating turn for {persona.name} after {len(history)} turns")
        text = await self.llm.generate_text(
            PromptBuilder.build_user_prompt(persona, history, personas),
            system_prompt=PromptBuilder.build_system_prompt(persona),
            temperature=self.temperature,
            max_tokens=self.max_tokens
        )
        text = (text or "").strip()
        if not text:
            raise GenerationError(f"{self.llm.provider_name()} returned no text for {persona.name}")

        return ConversationTurn(
            id=str(uuid.uuid4()),
            person_id=persona.id,
            text=text,
            is_generated=True
        )
