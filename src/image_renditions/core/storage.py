"""Object store adapter over a boto3 style S3 client."""

from typing import Tuple

from .error_handling import translate_s3_errors
from .exceptions import FetchError, StoreError
from .logging_config import get_logger
from .protocols import S3ClientProtocol


class S3ObjectStore:
    """Fetch-by-key and put-by-key primitives used by rendition jobs."""

    def __init__(self, s3_client: S3ClientProtocol):
        self._s3_client = s3_client
        self._logger = get_logger("image-renditions.storage")

    @translate_s3_errors(FetchError)
    def fetch_object(self, bucket: str, key: str) -> Tuple[bytes, str]:
        self._logger.debug(f"Downloading s3://{bucket}/{key}")
        response = self._s3_client.get_object(Bucket=bucket, Key=key)
        return response["Body"].read(), response.get("ContentType", "")

    @translate_s3_errors(StoreError)
    def store_object(
        self, bucket: str, key: str, body: bytes, content_type: str, acl: str
    ) -> None:
        self._logger.debug(f"Uploading {len(body)} bytes to s3://{bucket}/{key}")
        self._s3_client.put_object(
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            ACL=acl,
        )
