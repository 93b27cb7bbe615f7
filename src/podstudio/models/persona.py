from enum import Enum
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class VoiceCharacter(str, Enum):
    ENERGETIC = "energetic"
    CALM = "calm"
    SOPHISTICATED = "sophisticated"


class Persona(BaseModel):
    """A speaker taking part in the conversation.

    ``sex`` and ``voice_character`` stay plain strings so that unknown values
    are reported by the voice selector instead of failing request parsing.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    sex: Optional[str] = None
    age: Optional[float] = Field(default=None, ge=0)
    voice_character: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("voice_character", "voiceCharacter", "personalityType"),
        serialization_alias="voiceCharacter"
    )
    personality: Optional[str] = Field(
        default=None,
        description="Free-text description, only used for AI turn generation"
    )
    is_ai: bool = Field(default=False, alias="isAI")
