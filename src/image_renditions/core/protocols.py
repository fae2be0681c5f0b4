"""Protocol definitions for dependency injection and testability."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Protocol, Tuple

from .models import GeometryPlan, JobOutcome, SizeSpec


class S3ClientProtocol(Protocol):
    """Protocol for S3 client operations."""

    def get_object(self, Bucket: str, Key: str) -> Dict[str, Any]:
        """Get object from S3."""
        ...

    def put_object(
        self, Bucket: str, Key: str, Body: bytes, ContentType: str, ACL: str
    ) -> Dict[str, Any]:
        """Put object to S3."""
        ...


class ObjectStoreProtocol(Protocol):
    """Fetch and store primitives the jobs call into."""

    def fetch_object(self, bucket: str, key: str) -> Tuple[bytes, str]:
        """Return (body, content_type)."""
        ...

    def store_object(
        self, bucket: str, key: str, body: bytes, content_type: str, acl: str
    ) -> None:
        """Write body under key."""
        ...


class ImageTransformerProtocol(Protocol):
    """Protocol for image transform operations."""

    def decode(self, image_bytes: bytes) -> Any:
        """Decode image bytes; the result exposes width and height."""
        ...

    def render(self, decoded: Any, plan: GeometryPlan, output_format: str) -> bytes:
        """Crop, resize and encode a decoded image."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log error message."""
        ...


class SizeJobRunner(ABC):
    """Abstract runner for one size job."""

    @abstractmethod
    def run(self, bucket: str, key: str, size: SizeSpec) -> JobOutcome:
        """Produce one rendition and report its outcome."""
        ...

