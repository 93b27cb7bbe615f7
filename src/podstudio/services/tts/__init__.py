"""Text-to-Speech service package."""

from typing import Optional

from ...config import SpeechProviderType
from .base import (
    AudioConfig,
    SpeechProvider,
    SynthesisEngine,
    SynthesisTier,
    TextType,
    DEFAULT_TIERS
)
from .polly import PollySpeechProvider
from .synthesizer import TierStrategy, TurnSynthesizer

# Mapping of provider to implementation class
PROVIDER_MAP = {
    SpeechProviderType.POLLY: PollySpeechProvider,
}

def create_speech_provider(
    provider: SpeechProviderType,
    audio_config: Optional[AudioConfig] = None,
    **kwargs
) -> SpeechProvider:
    """Create the speech provider for the configured backend."""
    if provider not in PROVIDER_MAP:
        raise ValueError(f"Unsupported speech provider: {provider}")
    return PROVIDER_MAP[provider](audio_config=audio_config, **kwargs)

__all__ = [
    "AudioConfig",
    "SpeechProvider",
    "SynthesisEngine",
    "SynthesisTier",
    "TextType",
    "DEFAULT_TIERS",
    "PollySpeechProvider",
    "TierStrategy",
    "TurnSynthesizer",
    "PROVIDER_MAP",
    "create_speech_provider"
]
