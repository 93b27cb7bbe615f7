"""Shared fakes and fixtures."""

import asyncio
import re
from typing import Dict, List, Optional, Set, Tuple

import pytest

from podstudio.errors import ProviderError
from podstudio.models import ConversationTurn, Persona
from podstudio.services.tts.base import SpeechProvider, SynthesisTier
from podstudio.storage.base import ObjectStore


class FakeSpeechProvider(SpeechProvider):
    """Returns predictable bytes and records every call."""

    def __init__(
        self,
        failing_tiers: Optional[Set[str]] = None,
        failing_texts: Optional[Set[str]] = None,
        delays: Optional[Dict[str, float]] = None
    ):
        super().__init__()
        self.failing_tiers = failing_tiers or set()
        self.failing_texts = failing_texts or set()
        self.delays = delays or {}
        self.calls: List[Tuple[str, str, str]] = []
        self.completed: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def synthesize(self, text: str, voice_id: str, tier: SynthesisTier) -> bytes:
        self.calls.append((text, voice_id, tier.name))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            # Keys match the raw turn text, also when a tier wraps it in SSML
            await asyncio.sleep(max((d for key, d in self.delays.items() if key in text), default=0))
            if tier.name in self.failing_tiers or any(key in text for key in self.failing_texts):
                raise ProviderError(f"{tier.name} unavailable")
            # Spoken text only, with any SSML tags removed
            self.completed.append(re.sub(r"<[^>]+>", "", text))
            return f"[{voice_id}:{tier.name}:{text}]".encode("utf-8")
        finally:
            self.in_flight -= 1


class FakeObjectStore(ObjectStore):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.objects: Dict[str, Tuple[bytes, str]] = {}
        self.put_count = 0

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        self.put_count += 1
        if self.fail:
            raise OSError("bucket unreachable")
        self.objects[key] = (data, content_type)
        return f"https://store.test/{key}"


@pytest.fixture
def alice() -> Persona:
    return Persona(id="p1", name="Alice", sex="female", age=34, voice_character="calm")


@pytest.fixture
def bob() -> Persona:
    return Persona(id="p2", name="Bob", sex="male", age=41, voice_character="energetic", is_ai=True)


@pytest.fixture
def turns() -> List[ConversationTurn]:
    return [
        ConversationTurn(id="t1", person_id="p1", text="Welcome to the show."),
        ConversationTurn(id="t2", person_id="p2", text="Thanks for having me!", is_generated=True),
        ConversationTurn(id="t3", person_id="p1", text="Let's talk about tides & moons."),
    ]


@pytest.fixture
def voice_map() -> Dict[str, str]:
    return {"p1": "Joanna", "p2": "Justin"}


@pytest.fixture
def request_body() -> dict:
    return {
        "persons": [
            {"id": "p1", "name": "Alice", "sex": "female", "age": 34,
             "voiceCharacter": "calm", "personality": "Curious host", "isAI": False},
            {"id": "p2", "name": "Bob", "sex": "male", "age": 41,
             "voiceCharacter": "energetic", "personality": "", "isAI": True},
        ],
        "turns": [
            {"id": "t1", "personId": "p1", "text": "Welcome to the show.", "isGenerated": False},
            {"id": "t2", "personId": "p2", "text": "Thanks for having me!", "isGenerated": True},
        ],
    }
