"""Shared data models for the renditions pipeline."""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import RenditionPipelineError


class SizeSpec(BaseModel):
    """A configured target size for one rendition."""

    model_config = ConfigDict(frozen=True)

    name: str
    max_width: int = Field(gt=0)
    max_height: int = Field(gt=0)
    crop: bool = False

    @field_validator("name")
    @classmethod
    def _name_is_path_segment(cls, value: str) -> str:
        if not value or "/" in value:
            raise ValueError("size name must be a non-empty key segment without '/'")
        return value


class SourceImage(BaseModel):
    """An image fetched from the object store for one job."""

    bucket: str
    key: str
    body: bytes
    content_type: str = ""
    width: int = 0
    height: int = 0


class GeometryPlan(BaseModel):
    """Crop rectangle and output size for one (source, size) pair."""

    model_config = ConfigDict(frozen=True)

    crop_x: int
    crop_y: int
    crop_width: int
    crop_height: int
    output_width: int
    output_height: int

    @property
    def crop_box(self) -> Tuple[int, int, int, int]:
        """Pillow style (left, upper, right, lower) box."""
        return (
            self.crop_x,
            self.crop_y,
            self.crop_x + self.crop_width,
            self.crop_y + self.crop_height,
        )

    @property
    def output_size(self) -> Tuple[int, int]:
        return (self.output_width, self.output_height)


class JobStatus(str, Enum):
    """Terminal result of a rendition job."""

    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


class JobState(str, Enum):
    """States a rendition job moves through."""

    PENDING = "pending"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    PLANNING = "planning"
    TRANSFORMING = "transforming"
    STORING = "storing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class JobOutcome(BaseModel):
    """Result of processing one size for one source image."""

    size_name: str
    destination_key: str = ""
    status: JobStatus = JobStatus.FAILED
    error: str = ""
    error_kind: str = ""
    failed_state: Optional[JobState] = None
    message: str = ""
    processing_time: float = 0.0

    @property
    def succeeded(self) -> bool:
        """Skips are benign and count as success."""
        return self.status in (JobStatus.SUCCEEDED, JobStatus.SKIPPED)


class PipelineResult(BaseModel):
    """Overall result of one pipeline invocation."""

    source_bucket: str
    source_key: str
    success: bool = False
    error: str = ""
    outcomes: List[JobOutcome] = Field(default_factory=list)
    processing_time: float = 0.0

    def raise_for_status(self) -> None:
        """Raise RenditionPipelineError if any job failed."""
        if not self.success:
            raise RenditionPipelineError(self.error)

    def summary(self) -> Dict[str, Any]:
        counts = {status.value: 0 for status in JobStatus}
        for outcome in self.outcomes:
            counts[outcome.status.value] += 1
        return {
            "source": f"{self.source_bucket}/{self.source_key}",
            "success": self.success,
            "error": self.error,
            "processing_time": self.processing_time,
            **counts,
        }
