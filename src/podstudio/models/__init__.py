from .persona import Persona, Sex, VoiceCharacter
from .conversation import (
    ConversationTurn,
    PodcastRequest,
    SynthesisResult,
    PodcastArtifact
)

__all__ = [
    "Persona",
    "Sex",
    "VoiceCharacter",
    "ConversationTurn",
    "PodcastRequest",
    "SynthesisResult",
    "PodcastArtifact"
]
