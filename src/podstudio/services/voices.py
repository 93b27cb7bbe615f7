"""Persona to voice mapping."""

from typing import Dict, Iterable, Optional, Tuple
import logging

from ..errors import InvalidPersona
from ..models.persona import Persona, Sex, VoiceCharacter

logger = logging.getLogger(__name__)

# Amazon Polly en-US voices available on both the neural and standard engines,
# so every fallback tier can use the same voice.
VOICE_TABLE: Dict[Tuple[VoiceCharacter, Sex], str] = {
    (VoiceCharacter.ENERGETIC, Sex.FEMALE): "Kimberly",
    (VoiceCharacter.ENERGETIC, Sex.MALE): "Justin",
    (VoiceCharacter.CALM, Sex.FEMALE): "Joanna",
    (VoiceCharacter.CALM, Sex.MALE): "Matthew",
    (VoiceCharacter.SOPHISTICATED, Sex.FEMALE): "Kendra",
    (VoiceCharacter.SOPHISTICATED, Sex.MALE): "Joey",
}

def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()

def select_voice(persona: Persona) -> str:
    """Return the voice id for a persona's voice character and sex."""
    try:
        sex = Sex(_normalize(persona.sex))
    except ValueError:
        raise InvalidPersona(
            f"Persona {persona.id!r} has unsupported sex {persona.sex!r}; "
            f"expected one of: {', '.join(s.value for s in Sex)}"
        ) from None

    try:
        character = VoiceCharacter(_normalize(persona.voice_character))
    except ValueError:
        raise InvalidPersona(
            f"Persona {persona.id!r} has unsupported voice character {persona.voice_character!r}; "
            f"expected one of: {', '.join(c.value for c in VoiceCharacter)}"
        ) from None

    return VOICE_TABLE[(character, sex)]

def build_voice_map(personas: Iterable[Persona]) -> Dict[str, str]:
    """Map every persona id to its voice id."""
    voice_map = {}
    for persona in personas:
        voice_map[persona.id] = select_voice(persona)
        logger.debug(f"Persona {persona.name} ({persona.id}) -> voice {voice_map[persona.id]}")
    return voice_map
