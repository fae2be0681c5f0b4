"""Core utilities and shared components for the renditions pipeline."""

from .geometry import plan_geometry
from .keys import (
    decode_event_key,
    detect_image_type,
    is_supported_type,
    normalize_bucket,
    resolve_destination,
)
from .logging_config import get_logger, setup_logger
from .exceptions import (
    RenditionsError,
    ConfigurationError,
    KeyResolutionError,
    InvalidKeyShapeError,
    IdenticalKeysError,
    UnknownImageTypeError,
    S3Error,
    FetchError,
    StoreError,
    ImageProcessingError,
    DecodeError,
    TransformError,
    EncodeError,
    RenditionPipelineError,
)
from .models import (
    GeometryPlan,
    JobOutcome,
    JobState,
    JobStatus,
    PipelineResult,
    SizeSpec,
    SourceImage,
)
from .config import DEFAULT_IMAGE_SIZES, RenditionConfig, load_config

__all__ = [
    "SizeSpec",
    "SourceImage",
    "GeometryPlan",
    "JobOutcome",
    "JobState",
    "JobStatus",
    "PipelineResult",
    "DEFAULT_IMAGE_SIZES",
    "RenditionConfig",
    "load_config",
    "plan_geometry",
    "decode_event_key",
    "detect_image_type",
    "is_supported_type",
    "normalize_bucket",
    "resolve_destination",
    "setup_logger",
    "get_logger",
    "RenditionsError",
    "ConfigurationError",
    "KeyResolutionError",
    "InvalidKeyShapeError",
    "IdenticalKeysError",
    "UnknownImageTypeError",
    "S3Error",
    "FetchError",
    "StoreError",
    "ImageProcessingError",
    "DecodeError",
    "TransformError",
    "EncodeError",
    "RenditionPipelineError",
]
