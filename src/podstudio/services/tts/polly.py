"""Amazon Polly speech provider."""

import asyncio
import functools
import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...errors import ProviderError
from .base import AudioConfig, SpeechProvider, SynthesisTier

logger = logging.getLogger(__name__)

class PollySpeechProvider(SpeechProvider):
    """Speech synthesis through Polly's SynthesizeSpeech API."""

    def __init__(
        self,
        client=None,
        region_name: Optional[str] = None,
        audio_config: Optional[AudioConfig] = None
    ):
        super().__init__(audio_config)
        self.client = client or boto3.client("polly", region_name=region_name)

    async def synthesize(self, text: str, voice_id: str, tier: SynthesisTier) -> bytes:
        # boto3 is blocking; run each call in the default executor so turns overlap
        loop = asyncio.get_running_loop()
        try:
            audio = await loop.run_in_executor(
                None,
                functools.partial(self._synthesize_sync, text, voice_id, tier)
            )
        except (BotoCoreError, ClientError) as e:
            raise ProviderError(f"Polly {tier.name} synthesis failed for voice {voice_id}: {e}") from e

        if not audio:
            raise ProviderError(f"Polly {tier.name} returned an empty audio stream for voice {voice_id}")
        return audio

    def _synthesize_sync(self, text: str, voice_id: str, tier: SynthesisTier) -> bytes:
        response = self.client.synthesize_speech(
            Text=text,
            TextType=tier.text_type.value,
            VoiceId=voice_id,
            Engine=tier.engine.value,
            OutputFormat=self.audio_config.format,
            SampleRate=self.audio_config.sample_rate,
            LanguageCode=self.audio_config.language_code
        )
        stream = response["AudioStream"]
        try:
            return stream.read()
        finally:
            stream.close()
