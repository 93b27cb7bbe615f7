"""Prompt building for persona turn generation."""

from typing import Dict, List, Sequence
from ...models.conversation import ConversationTurn
from ...models.persona import Persona

SYSTEM_PROMPT_TEMPLATE = """You are {name}, a {age}-year-old {sex} with the following personality: {personality}

You are participating in a podcast conversation. Stay in character and respond naturally based on the conversation so far.

Keep your response concise and conversational (10-12 sentences max). Speak as if you're in a real podcast."""

class PromptBuilder:
    """Builds prompts that make the LLM speak as one persona."""

    @staticmethod
    def describe_personality(persona: Persona) -> str:
        if persona.personality and persona.personality.strip():
            return persona.personality.strip()
        character = persona.voice_character or "friendly"
        age = f"{persona.age:g} years old" if persona.age is not None else "adult"
        return f"{character} character ({age})"

    @staticmethod
    def build_system_prompt(persona: Persona) -> str:
        return SYSTEM_PROMPT_TEMPLATE.format(
            name=persona.name,
            age=f"{persona.age:g}" if persona.age is not None else "adult",
            sex=persona.sex or "person",
            personality=PromptBuilder.describe_personality(persona)
        )

    @staticmethod
    def format_history(history: Sequence[ConversationTurn], personas: Sequence[Persona]) -> str:
        names: Dict[str, str] = {p.id: p.name for p in personas}
        lines: List[str] = [
            f"{names.get(turn.person_id, 'Unknown')}: {turn.text}"
            for turn in history
        ]
        return "\n\n".join(lines)

    @staticmethod
    def build_user_prompt(
        persona: Persona,
        history: Sequence[ConversationTurn],
        personas: Sequence[Persona]
    ) -> str:
        context = PromptBuilder.format_history(history, personas)
        if context:
            return f"Here's the conversation so far:\n\n{context}\n\nNow respond as {persona.name}:"
        return f"Start the conversation as {persona.name}. Introduce yourself or make an opening statement."
