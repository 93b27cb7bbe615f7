import asyncio
import functools
import logging
from typing import Optional

import boto3

from .base import ObjectStore

logger = logging.getLogger(__name__)

class S3ObjectStore(ObjectStore):
    """Stores objects in an S3 bucket and returns presigned GET URLs."""

    def __init__(
        self,
        bucket: str,
        client=None,
        region_name: Optional[str] = None,
        url_expiry: int = 3600
    ):
        if not bucket:
            raise ValueError("S3 bucket name not provided")
        self.bucket = bucket
        self.url_expiry = url_expiry
        self.client = client or boto3.client("s3", region_name=region_name)

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            functools.partial(self._put_sync, key, data, content_type)
        )

    def _put_sync(self, key: str, data: bytes, content_type: str) -> str:
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type
        )
        logger.info(f"Uploaded {len(data)} bytes to s3://{self.bucket}/{key}")
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=self.url_expiry
        )
