"""
S3-based local store using one-object-per-key pattern.

Each record is stored as a separate S3 object with key: {prefix}/{record key}
Body: the UTF-8 record value

Lets several machines share one identity and one set of version records
(e.g. CI runners), at the cost of a network round trip per access.
"""

from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.errors import LocalStoreError
from .store import LocalStore

_MISSING_CODES = ("NoSuchKey", "404", "NotFound")


class S3LocalStore(LocalStore):
    """
    S3-backed local store.

    Object key: {prefix}/{record key}
    Body: UTF-8 string value
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "hashstorage",
        endpoint_url: Optional[str] = None,
        region: str = "us-east-1",
    ) -> None:
        """
        Initialize S3 local store.

        Args:
            bucket: S3 bucket name
            prefix: Key prefix for records (default: "hashstorage")
            endpoint_url: S3 endpoint URL (for MinIO, localstack, etc.)
            region: AWS region (default: us-east-1)

        Raises:
            LocalStoreError: If S3 client creation fails
        """
        self.bucket = bucket
        self.prefix = prefix.rstrip("/")
        try:
            self.client = boto3.client("s3", endpoint_url=endpoint_url, region_name=region)
        except (BotoCoreError, ClientError) as ex:
            raise LocalStoreError(f"failed to create S3 client: {ex}") from ex

    def _object_key(self, key: str) -> str:
        return f"{self.prefix}/{key}" if self.prefix else key

    def get(self, key: str) -> Optional[str]:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=self._object_key(key))
        except ClientError as ex:
            if ex.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return None
            raise LocalStoreError(f"S3 get failed for {key}: {ex}") from ex
        except BotoCoreError as ex:
            raise LocalStoreError(f"S3 get failed for {key}: {ex}") from ex
        return response["Body"].read().decode("utf-8")

    def set(self, key: str, value: str) -> None:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=self._object_key(key),
                Body=value.encode("utf-8"),
                ContentType="text/plain; charset=utf-8",
            )
        except (BotoCoreError, ClientError) as ex:
            raise LocalStoreError(f"S3 put failed for {key}: {ex}") from ex

    def remove(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=self._object_key(key))
        except (BotoCoreError, ClientError) as ex:
            raise LocalStoreError(f"S3 delete failed for {key}: {ex}") from ex
