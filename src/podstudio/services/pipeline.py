"""Concurrent turn synthesis and concatenation."""

import asyncio
import logging
import time
from typing import Dict, Iterable, Optional, Sequence

from ..errors import InvalidPersona, InvalidRequest
from ..models.conversation import ConversationTurn, SynthesisResult
from ..models.persona import Persona
from .tts.synthesizer import TurnSynthesizer
from .voices import build_voice_map

logger = logging.getLogger(__name__)

class PodcastPipeline:
    """Renders an ordered conversation to a single audio buffer.

    Every turn is synthesized concurrently. Each task carries the turn's index
    and results are sorted by that index before concatenation, so completion
    order never affects playback order. The run is all-or-nothing: one failed
    turn fails the whole conversation.
    """

    def __init__(self, synthesizer: TurnSynthesizer, max_concurrency: Optional[int] = None):
        self.synthesizer = synthesizer
        self.max_concurrency = max_concurrency

    async def render(self, persons: Iterable[Persona], turns: Sequence[ConversationTurn]) -> bytes:
        """Select voices for the personas and synthesize the conversation."""
        return await self.synthesize_conversation(turns, build_voice_map(persons))

    async def synthesize_conversation(
        self,
        turns: Sequence[ConversationTurn],
        persona_voice_map: Dict[str, str]
    ) -> bytes:
        turns = list(turns)
        if not turns:
            raise InvalidRequest("At least one conversation turn is required")

        # Resolve every voice before dispatching so a bad reference costs no provider calls
        voices = [self._resolve_voice(turn, persona_voice_map) for turn in turns]

        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        started = time.monotonic()
        logger.info(f"Synthesizing {len(turns)} turns concurrently")

        outcomes = await asyncio.gather(
            *[
                self._synthesize_indexed(index, turn, voice, semaphore)
                for index, (turn, voice) in enumerate(zip(turns, voices))
            ],
            return_exceptions=True
        )

        failures = []
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                failures.append(outcome)

        if failures:
            logger.error(f"{len(failures)} of {len(turns)} turns failed; aborting podcast")
            raise failures[0]

        results = sorted(outcomes, key=lambda result: result.index)
        audio = b"".join(result.audio for result in results)

        logger.info(
            f"Synthesized {len(results)} turns into {len(audio)} bytes "
            f"in {time.monotonic() - started:.2f}s"
        )
        return audio

    async def _synthesize_indexed(
        self,
        index: int,
        turn: ConversationTurn,
        voice_id: str,
        semaphore: Optional[asyncio.Semaphore]
    ) -> SynthesisResult:
        if semaphore is None:
            audio = await self.synthesizer.synthesize_turn(turn, voice_id)
        else:
            async with semaphore:
                audio = await self.synthesizer.synthesize_turn(turn, voice_id)
        return SynthesisResult(index=index, audio=audio)

    @staticmethod
    def _resolve_voice(turn: ConversationTurn, persona_voice_map: Dict[str, str]) -> str:
        try:
            return persona_voice_map[turn.person_id]
        except KeyError:
            raise InvalidPersona(
                f"Turn {turn.id!r} references unknown persona {turn.person_id!r}"
            ) from None
