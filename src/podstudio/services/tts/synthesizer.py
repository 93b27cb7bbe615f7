"""Per-turn synthesis with an ordered fallback chain."""

import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from ...errors import ProviderError, SynthesisFailure
from ...models.conversation import ConversationTurn
from ..markup import render_ssml
from .base import DEFAULT_TIERS, SpeechProvider, SynthesisTier, TextType

logger = logging.getLogger(__name__)

Strategy = Callable[[ConversationTurn, str], Awaitable[bytes]]

class TierStrategy:
    """Synthesizes a turn with one provider tier."""

    def __init__(self, provider: SpeechProvider, tier: SynthesisTier, prosody_rate: str = "medium"):
        self.provider = provider
        self.tier = tier
        self.prosody_rate = prosody_rate
        self.name = tier.name

    def prepare_text(self, text: str) -> str:
        if self.tier.text_type == TextType.SSML:
            return render_ssml(text, self.prosody_rate)
        return text

    async def __call__(self, turn: ConversationTurn, voice_id: str) -> bytes:
        return await self.provider.synthesize(self.prepare_text(turn.text), voice_id, self.tier)

    def __repr__(self) -> str:
        return f"TierStrategy({self.name!r})"

def _strategy_name(strategy: Strategy) -> str:
    return getattr(strategy, "name", getattr(strategy, "__name__", repr(strategy)))

class TurnSynthesizer:
    """Turns one conversation turn into audio, falling back across strategies.

    Strategies are tried in order and the first success wins; later strategies
    are not called. Any exception from a strategy moves on to the next one,
    whatever its cause.
    """

    def __init__(self, strategies: Sequence[Strategy]):
        if not strategies:
            raise ValueError("At least one synthesis strategy is required")
        self.strategies: List[Strategy] = list(strategies)

    @classmethod
    def from_provider(
        cls,
        provider: SpeechProvider,
        tiers: Optional[Sequence[SynthesisTier]] = None,
        prosody_rate: str = "medium"
    ) -> "TurnSynthesizer":
        return cls([
            TierStrategy(provider, tier, prosody_rate)
            for tier in (tiers or DEFAULT_TIERS)
        ])

    async def synthesize_turn(self, turn: ConversationTurn, voice_id: str) -> bytes:
        attempts = []
        last_error = None

        for strategy in self.strategies:
            name = _strategy_name(strategy)
            try:
                audio = await strategy(turn, voice_id)
                if not audio:
                    raise ProviderError("empty audio payload")
            except Exception as e:
                logger.warning(f"Strategy {name} failed for turn {turn.id}: {e}")
                attempts.append(f"{name}: {e}")
                last_error = e
                continue

            if attempts:
                logger.info(f"Turn {turn.id} synthesized with fallback strategy {name}")
            else:
                logger.debug(f"Turn {turn.id} synthesized with {name} ({len(audio)} bytes)")
            return audio

        raise SynthesisFailure(
            f"All {len(self.strategies)} synthesis strategies failed for turn {turn.id}: "
            + "; ".join(attempts),
            turn_id=turn.id,
            attempts=attempts
        ) from last_error
