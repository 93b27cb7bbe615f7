from dataclasses import dataclass
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from .persona import Persona


class ConversationTurn(BaseModel):
    """One utterance by one persona."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    person_id: str = Field(alias="personId")
    text: str
    is_generated: bool = Field(default=False, alias="isGenerated")

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("turn text must not be empty")
        return value


class PodcastRequest(BaseModel):
    """Inbound render request: personas plus the ordered turns."""
    model_config = ConfigDict(frozen=True)

    persons: List[Persona]
    turns: List[ConversationTurn] = Field(min_length=1)

    @model_validator(mode="after")
    def unique_persona_ids(self) -> "PodcastRequest":
        seen = set()
        for persona in self.persons:
            if persona.id in seen:
                raise ValueError(f"duplicate persona id: {persona.id}")
            seen.add(persona.id)
        return self


@dataclass(frozen=True)
class SynthesisResult:
    """Audio for one turn, tagged with the turn's position in the conversation."""
    index: int
    audio: bytes


@dataclass(frozen=True)
class PodcastArtifact:
    """The concatenated podcast audio, ready to publish."""
    data: bytes
    content_type: str
    key: str

    @property
    def size(self) -> int:
        return len(self.data)
