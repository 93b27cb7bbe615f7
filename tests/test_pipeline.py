import pytest

from podstudio.errors import InvalidPersona, InvalidRequest, SynthesisFailure
from podstudio.models import ConversationTurn, Persona
from podstudio.services.pipeline import PodcastPipeline
from podstudio.services.tts import TurnSynthesizer

from conftest import FakeSpeechProvider


def make_pipeline(provider, **kwargs) -> PodcastPipeline:
    return PodcastPipeline(TurnSynthesizer.from_provider(provider), **kwargs)


@pytest.mark.asyncio
async def test_output_length_is_sum_of_segments(turns, voice_map):
    provider = FakeSpeechProvider()
    pipeline = make_pipeline(provider)

    audio = await pipeline.synthesize_conversation(turns, voice_map)

    segments = [
        await TurnSynthesizer.from_provider(FakeSpeechProvider()).synthesize_turn(t, voice_map[t.person_id])
        for t in turns
    ]
    assert len(audio) == sum(len(s) for s in segments)
    assert audio == b"".join(segments)


@pytest.mark.asyncio
async def test_order_preserved_when_later_turns_finish_first(voice_map):
    turns = [
        ConversationTurn(id="t1", person_id="p1", text="first"),
        ConversationTurn(id="t2", person_id="p2", text="second"),
        ConversationTurn(id="t3", person_id="p1", text="third"),
    ]
    provider = FakeSpeechProvider(delays={"first": 0.05, "second": 0.02, "third": 0.0})
    pipeline = make_pipeline(provider)

    audio = await pipeline.synthesize_conversation(turns, voice_map)

    assert provider.completed == ["third", "second", "first"]
    assert audio == (
        b"[Joanna:neural-ssml:<speak><prosody rate=\"medium\">first</prosody></speak>]"
        b"[Justin:neural-ssml:<speak><prosody rate=\"medium\">second</prosody></speak>]"
        b"[Joanna:neural-ssml:<speak><prosody rate=\"medium\">third</prosody></speak>]"
    )


@pytest.mark.asyncio
async def test_all_turns_dispatched_concurrently(turns, voice_map):
    provider = FakeSpeechProvider(delays={t.text: 0.01 for t in turns})

    await make_pipeline(provider).synthesize_conversation(turns, voice_map)

    assert provider.max_in_flight == len(turns)


@pytest.mark.asyncio
async def test_max_concurrency_bounds_in_flight_calls(turns, voice_map):
    provider = FakeSpeechProvider(delays={t.text: 0.01 for t in turns})
    pipeline = make_pipeline(provider, max_concurrency=1)

    audio = await pipeline.synthesize_conversation(turns, voice_map)

    assert provider.max_in_flight == 1
    assert audio.index(b"Welcome") < audio.index(b"Thanks") < audio.index(b"tides")


@pytest.mark.asyncio
async def test_unknown_persona_fails_before_any_provider_call(voice_map):
    turns = [
        ConversationTurn(id="t1", person_id="p1", text="Hello"),
        ConversationTurn(id="t2", person_id="ghost", text="Boo"),
    ]
    provider = FakeSpeechProvider()

    with pytest.raises(InvalidPersona, match="ghost"):
        await make_pipeline(provider).synthesize_conversation(turns, voice_map)

    assert provider.calls == []


@pytest.mark.asyncio
async def test_one_failed_turn_fails_the_whole_run(turns, voice_map):
    provider = FakeSpeechProvider(failing_texts={"Thanks for having me!"})

    with pytest.raises(SynthesisFailure) as exc_info:
        await make_pipeline(provider).synthesize_conversation(turns, voice_map)

    assert exc_info.value.turn_id == "t2"
    # The other turns still ran to completion before the run was failed
    assert len(provider.completed) == 2


@pytest.mark.asyncio
async def test_lowest_index_failure_is_reported(turns, voice_map):
    provider = FakeSpeechProvider(failing_tiers={"neural-ssml", "neural-text", "standard-text"})

    with pytest.raises(SynthesisFailure) as exc_info:
        await make_pipeline(provider).synthesize_conversation(turns, voice_map)

    assert exc_info.value.turn_id == "t1"


@pytest.mark.asyncio
async def test_empty_turns_rejected(voice_map):
    with pytest.raises(InvalidRequest):
        await make_pipeline(FakeSpeechProvider()).synthesize_conversation([], voice_map)


@pytest.mark.asyncio
async def test_render_selects_voices_from_personas(alice, bob, turns):
    provider = FakeSpeechProvider()

    audio = await make_pipeline(provider).render([alice, bob], turns)

    assert [voice for _, voice, _ in provider.calls] == ["Joanna", "Justin", "Joanna"]
    assert audio.count(b"[") == 3


@pytest.mark.asyncio
async def test_render_tolerates_missing_ai_persona(alice):
    turns = [ConversationTurn(id="t1", person_id="p1", text="Just me today.")]

    audio = await make_pipeline(FakeSpeechProvider()).render([alice], turns)

    assert b"Just me today." in audio


@pytest.mark.asyncio
async def test_render_rejects_persona_without_voice(turns):
    personas = [
        Persona(id="p1", name="Alice", sex="female", voice_character="calm"),
        Persona(id="p2", name="Bob", sex="robot", voice_character="calm"),
    ]
    with pytest.raises(InvalidPersona):
        await make_pipeline(FakeSpeechProvider()).render(personas, turns)
