from typing import Optional
from ..config import Settings, StorageBackend
from .base import ObjectStore
from .s3_store import S3ObjectStore
from .local_store import LocalObjectStore

def create_object_store(
    app_settings: Settings,
    backend: Optional[StorageBackend] = None
) -> ObjectStore:
    """Create the object store for the configured backend."""
    backend = backend or app_settings.storage_backend
    if backend == StorageBackend.S3:
        return S3ObjectStore(
            bucket=app_settings.podcast_bucket_name,
            region_name=app_settings.aws_region,
            url_expiry=app_settings.presigned_url_expiry
        )
    elif backend == StorageBackend.LOCAL:
        return LocalObjectStore(
            app_settings.paths.get_path("output"),
            public_base_url=app_settings.public_base_url
        )
    else:
        raise ValueError(f"Unsupported storage backend: {backend}")

__all__ = ["ObjectStore", "S3ObjectStore", "LocalObjectStore", "create_object_store"]
