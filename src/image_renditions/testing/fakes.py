"""Fake implementations for testing purposes."""

import io
import threading
import time
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
from PIL import Image

from botocore.exceptions import ClientError


@dataclass
class S3Object:
    """Fake S3 object for testing."""

    key: str
    body: bytes
    content_type: str = "image/jpeg"
    acl: str = "private"
    size: int = 0

    def __post_init__(self):
        if self.size == 0:
            self.size = len(self.body)


@dataclass
class S3Bucket:
    """Fake S3 bucket for testing."""

    name: str
    objects: Dict[str, S3Object] = field(default_factory=dict)

    def add_object(
        self,
        key: str,
        body: bytes,
        content_type: str = "image/jpeg",
        acl: str = "private",
    ) -> None:
        """Add object to bucket."""
        self.objects[key] = S3Object(
            key=key, body=body, content_type=content_type, acl=acl
        )

    def get_object(self, key: str) -> Optional[S3Object]:
        """Get object from bucket."""
        return self.objects.get(key)

    def list_keys(self, prefix: str = "") -> List[str]:
        return sorted(key for key in self.objects if key.startswith(prefix))


def _client_error(code: str, message: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeS3Client:
    """Fake S3 client for testing, safe to share between threads."""

    def __init__(self):
        self.buckets: Dict[str, S3Bucket] = {}
        self.calls: List[Tuple[str, str, str]] = []
        self.should_fail = False
        self.failure_message = "Simulated S3 failure"
        self.delay_seconds = 0.0
        self._failing_puts: Dict[str, str] = {}
        self._lock = threading.Lock()

    def create_bucket(self, name: str) -> S3Bucket:
        """Create a new bucket."""
        bucket = S3Bucket(name=name)
        self.buckets[name] = bucket
        return bucket

    def get_bucket(self, name: str) -> Optional[S3Bucket]:
        """Get bucket by name."""
        return self.buckets.get(name)

    def set_failure_mode(
        self, should_fail: bool, message: str = "Simulated failure"
    ) -> None:
        """Make every call fail."""
        self.should_fail = should_fail
        self.failure_message = message

    def fail_put_for(self, key: str, code: str = "InternalError") -> None:
        """Make put_object fail for one destination key."""
        self._failing_puts[key] = code

    def set_delay(self, seconds: float) -> None:
        self.delay_seconds = seconds

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)

    def _record(self, operation: str, bucket: str, key: str) -> None:
        with self._lock:
            self.calls.append((operation, bucket, key))

    def get_object(self, Bucket: str, Key: str) -> Dict[str, Any]:
        """Get object from S3."""
        self._record("get_object", Bucket, Key)

        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)

        if self.should_fail:
            raise _client_error("InternalError", self.failure_message, "GetObject")

        bucket = self.buckets.get(Bucket)
        if not bucket:
            raise _client_error("NoSuchBucket", f"Bucket {Bucket} not found", "GetObject")

        obj = bucket.get_object(Key)
        if not obj:
            raise _client_error("NoSuchKey", f"Object {Key} not found", "GetObject")

        return {
            "Body": io.BytesIO(obj.body),
            "ContentType": obj.content_type,
            "ContentLength": obj.size,
        }

    def put_object(
        self,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
        ACL: str = "private",
    ) -> Dict[str, Any]:
        """Put object to S3."""
        self._record("put_object", Bucket, Key)

        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)

        if self.should_fail:
            raise _client_error("InternalError", self.failure_message, "PutObject")

        if Key in self._failing_puts:
            raise _client_error(
                self._failing_puts[Key], f"Simulated failure for {Key}", "PutObject"
            )

        bucket = self.buckets.get(Bucket)
        if not bucket:
            raise _client_error("NoSuchBucket", f"Bucket {Bucket} not found", "PutObject")

        with self._lock:
            bucket.add_object(Key, Body, ContentType, ACL)

        return {
            "ETag": f'"fake-etag-{Key}"',
            "ResponseMetadata": {"HTTPStatusCode": 200},
        }


class FakeLogger:
    """Fake logger for testing with support for LogContext."""

    def __init__(self, name: str = "test_logger"):
        self.name = name
        self.logs: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def _log(
        self, level: str, message: str, context: Any = None, **kwargs: Any
    ) -> None:
        log_entry = {
            "level": level,
            "message": message,
            "timestamp": time.time(),
            **kwargs,
        }

        if context is not None:
            if hasattr(context, "correlation_id"):
                log_entry["correlation_id"] = context.correlation_id
            if hasattr(context, "operation"):
                log_entry["operation"] = context.operation
            if hasattr(context, "metadata"):
                log_entry.update(context.metadata)

        with self._lock:
            self.logs.append(log_entry)

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        self._log("DEBUG", message, context, **kwargs)

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        self._log("INFO", message, context, **kwargs)

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        self._log("WARNING", message, context, **kwargs)

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        self._log("ERROR", message, context, **kwargs)

    def get_logs(self, level: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get logged messages, optionally filtered by level."""
        if level:
            return [log for log in self.logs if log["level"] == level]
        return self.logs.copy()

    def clear_logs(self) -> None:
        self.logs.clear()


def create_test_image(
    width: int = 100, height: int = 100, format: str = "JPEG", mode: str = "RGB"
) -> bytes:
    """Create a test image in memory."""
    fill = (255, 0, 0, 255) if mode == "RGBA" else "red"
    image = Image.new(mode, (width, height), color=fill)

    # Blue block in the top-left corner so crops are distinguishable
    blue = (0, 0, 255, 255) if mode == "RGBA" else (0, 0, 255)
    image.paste(blue, (0, 0, max(1, width // 4), max(1, height // 4)))

    img_bytes = io.BytesIO()
    image.save(img_bytes, format=format)
    return img_bytes.getvalue()


def setup_test_s3_environment() -> FakeS3Client:
    """Set up a test S3 environment with sample uploads."""
    s3_client = FakeS3Client()

    bucket = s3_client.create_bucket("test-bucket")
    bucket.add_object("original/abc123/landscape.jpg", create_test_image(1920, 1080))
    bucket.add_object("original/def456/portrait.jpeg", create_test_image(600, 900))
    bucket.add_object(
        "original/ghi789/logo.png",
        create_test_image(400, 400, format="PNG", mode="RGBA"),
        content_type="image/png",
    )
    bucket.add_object("original/jkl012/anim.gif", b"GIF89a", content_type="image/gif")
    bucket.add_object("original/mno345/broken.jpg", b"not an image")

    return s3_client
