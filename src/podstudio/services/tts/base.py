"""Base classes for speech synthesis."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Tuple
import logging

logger = logging.getLogger(__name__)

class SynthesisEngine(str, Enum):
    NEURAL = "neural"
    STANDARD = "standard"

class TextType(str, Enum):
    SSML = "ssml"
    TEXT = "text"

@dataclass(frozen=True)
class SynthesisTier:
    """One synthesis strategy: an engine plus a markup mode."""
    name: str
    engine: SynthesisEngine
    text_type: TextType

# Tried in this order; each later tier trades quality for availability.
DEFAULT_TIERS: Tuple[SynthesisTier, ...] = (
    SynthesisTier("neural-ssml", SynthesisEngine.NEURAL, TextType.SSML),
    SynthesisTier("neural-text", SynthesisEngine.NEURAL, TextType.TEXT),
    SynthesisTier("standard-text", SynthesisEngine.STANDARD, TextType.TEXT),
)

CONTENT_TYPES = {
    "mp3": "audio/mpeg",
    "ogg_vorbis": "audio/ogg",
    "pcm": "audio/pcm",
}

class AudioConfig:
    """Output format shared by every tier, so segments can be concatenated as bytes."""
    def __init__(
        self,
        format: str = "mp3",
        sample_rate: str = "22050",
        language_code: str = "en-US"
    ):
        if format not in CONTENT_TYPES:
            raise ValueError(f"Unsupported output format: {format}")
        self.format = format
        self.sample_rate = sample_rate
        self.language_code = language_code

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self.format]

    @property
    def extension(self) -> str:
        return "ogg" if self.format == "ogg_vorbis" else self.format

class SpeechProvider(ABC):
    """Capability interface for an external text-to-speech service."""

    def __init__(self, audio_config: AudioConfig = None):
        self.audio_config = audio_config or AudioConfig()

    @abstractmethod
    async def synthesize(self, text: str, voice_id: str, tier: SynthesisTier) -> bytes:
        """Synthesize prepared text for a tier.

        ``text`` is already in the form the tier expects (SSML or plain text).
        Raises ProviderError on any failure.
        """
        pass

    def provider_name(self) -> str:
        return self.__class__.__name__.replace('SpeechProvider', '')
