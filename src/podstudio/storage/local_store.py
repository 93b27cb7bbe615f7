import asyncio
import logging
from pathlib import Path
from typing import Optional

from .base import ObjectStore

logger = logging.getLogger(__name__)

class LocalObjectStore(ObjectStore):
    """Stores objects as files under a base directory.

    URLs point at ``public_base_url`` when one is configured (for instance the
    bundled HTTP server's ``/files/`` route), otherwise at the file itself.
    """

    def __init__(self, base_dir: Path, public_base_url: Optional[str] = None):
        self.base_dir = Path(base_dir)
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self.lock = asyncio.Lock()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        path = (self.base_dir / key).resolve()
        if self.base_dir.resolve() not in path.parents:
            raise ValueError(f"Object key escapes the store directory: {key}")
        return path

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        path = self.path_for(key)
        async with self.lock:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        logger.info(f"Wrote {len(data)} bytes ({content_type}) to {path}")

        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        return path.as_uri()
