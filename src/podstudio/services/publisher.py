"""Publishes rendered podcasts to an object store."""

import logging

from ..errors import PublishFailure
from ..models.conversation import PodcastArtifact
from ..storage.base import ObjectStore
from .tts.base import AudioConfig

logger = logging.getLogger(__name__)

class Publisher:
    """Writes a podcast once under a request-scoped key and returns its URL.

    Retries, if any, are the store's concern; a failed write is reported as
    PublishFailure straight away.
    """

    def __init__(
        self,
        store: ObjectStore,
        audio_config: AudioConfig = None,
        key_prefix: str = "podcasts/"
    ):
        self.store = store
        self.audio_config = audio_config or AudioConfig()
        self.key_prefix = key_prefix

    def key_for(self, request_id: str) -> str:
        return f"{self.key_prefix}{request_id}.{self.audio_config.extension}"

    def build_artifact(self, data: bytes, request_id: str) -> PodcastArtifact:
        if not request_id:
            raise PublishFailure("A request id is required to publish a podcast")
        return PodcastArtifact(
            data=data,
            content_type=self.audio_config.content_type,
            key=self.key_for(request_id)
        )

    async def publish(self, data: bytes, request_id: str) -> str:
        artifact = self.build_artifact(data, request_id)
        try:
            url = await self.store.put(artifact.key, artifact.data, artifact.content_type)
        except Exception as e:
            logger.error(f"Failed to publish {artifact.key}: {e}")
            raise PublishFailure(f"Failed to publish podcast {artifact.key}: {e}") from e

        logger.info(f"Published podcast {artifact.key} ({artifact.size} bytes)")
        return url
