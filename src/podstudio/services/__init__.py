"""Core services for podcast rendering."""

from .voices import VOICE_TABLE, select_voice, build_voice_map
from .markup import escape_markup, render_ssml
from .pipeline import PodcastPipeline
from .publisher import Publisher

from .tts import (
    AudioConfig,
    SpeechProvider,
    SynthesisTier,
    DEFAULT_TIERS,
    PollySpeechProvider,
    TurnSynthesizer,
    create_speech_provider
)

from .llm import (
    LLMService,
    OpenAIService,
    TurnGenerator,
    create_llm_service
)

__all__ = [
    # Voice selection and markup
    "VOICE_TABLE",
    "select_voice",
    "build_voice_map",
    "escape_markup",
    "render_ssml",

    # Pipeline
    "PodcastPipeline",
    "Publisher",

    # Speech synthesis
    "AudioConfig",
    "SpeechProvider",
    "SynthesisTier",
    "DEFAULT_TIERS",
    "PollySpeechProvider",
    "TurnSynthesizer",
    "create_speech_provider",

    # AI turns
    "LLMService",
    "OpenAIService",
    "TurnGenerator",
    "create_llm_service"
]
