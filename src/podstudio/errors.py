"""Error taxonomy for podcast rendering."""

from typing import List, Optional


class PodcastError(Exception):
    """Base class for all podstudio errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(PodcastError):
    """The inbound request is missing or has malformed fields."""


class InvalidPersona(PodcastError):
    """A persona cannot be mapped to a voice, or a turn references an unknown persona."""


class ProviderError(PodcastError):
    """A single speech provider call failed."""


class SynthesisFailure(PodcastError):
    """Every fallback tier failed for a turn."""

    def __init__(
        self,
        message: str,
        turn_id: Optional[str] = None,
        attempts: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.turn_id = turn_id
        self.attempts = attempts or []


class PublishFailure(PodcastError):
    """The object store write failed."""


class GenerationError(PodcastError):
    """The AI turn generator could not produce an utterance."""
