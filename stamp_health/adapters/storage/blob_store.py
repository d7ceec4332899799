"""S3-compatible object store for the stamp state marker."""

import logging
from typing import Any, Optional

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from stamp_health.config import StorageConfig
from stamp_health.exceptions import ServiceNotStartedError, StorageUnavailableError

logger = logging.getLogger(__name__)

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class BlobStore:
    """Async S3 client scoped to one bucket."""

    def __init__(self, config: StorageConfig) -> None:
        self._config = config
        self._session = aioboto3.Session()
        self._client_context: Any = None
        self._client: Any = None

    @property
    def bucket(self) -> str:
        return self._config.bucket

    @property
    def client(self) -> Any:
        """Native aiobotocore S3 client."""
        if self._client is None:
            raise ServiceNotStartedError("BlobStore not started. Call start() first.")
        return self._client

    async def start(self) -> None:
        cfg = self._config
        self._client_context = self._session.client(
            "s3",
            endpoint_url=cfg.endpoint_url,
            region_name=cfg.region,
            aws_access_key_id=cfg.access_key_id,
            aws_secret_access_key=cfg.secret_access_key,
        )
        self._client = await self._client_context.__aenter__()
        logger.debug("Initiated state object store for bucket %r at %s", cfg.bucket, cfg.endpoint_url)

    async def stop(self) -> None:
        if self._client_context is None:
            return
        try:
            await self._client_context.__aexit__(None, None, None)
        finally:
            self._client = None
            self._client_context = None

    async def exists(self, key: str) -> bool:
        """Check whether key exists in the bucket.

        Returns False only for a definite "not found"; any other failure
        raises StorageUnavailableError.
        """
        try:
            await self.client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in _MISSING_CODES:
                return False
            raise StorageUnavailableError(f"Failed to check {self.bucket}/{key}: {e}") from e
        except BotoCoreError as e:
            raise StorageUnavailableError(f"Failed to check {self.bucket}/{key}: {e}") from e

    async def read_text(self, key: str, encoding: str = "utf-8") -> str:
        """Download key and decode it as text."""
        try:
            response = await self.client.get_object(Bucket=self.bucket, Key=key)
            async with response["Body"] as body:
                data = await body.read()
        except (ClientError, BotoCoreError) as e:
            raise StorageUnavailableError(f"Failed to read {self.bucket}/{key}: {e}") from e
        return data.decode(encoding)
