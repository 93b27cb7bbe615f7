from abc import ABC, abstractmethod

class ObjectStore(ABC):
    """Capability interface for a key -> bytes store that issues retrieval URLs."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Write ``data`` under ``key`` and return a URL for retrieving it."""
        pass
