"""Static configuration: size specs, output ACL and supported types."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .image_utils import TYPE_FORMATS
from .models import SizeSpec

DEFAULT_ACL = "public-read"
DEFAULT_SUPPORTED_TYPES: Tuple[str, ...] = ("jpg", "jpeg", "png")

DEFAULT_IMAGE_SIZES: List[SizeSpec] = [
    SizeSpec(name="large", max_width=640, max_height=640, crop=False),
    SizeSpec(name="large_square", max_width=640, max_height=640, crop=True),
    SizeSpec(name="medium", max_width=320, max_height=320, crop=False),
    SizeSpec(name="medium_square", max_width=320, max_height=320, crop=True),
    SizeSpec(name="thumb", max_width=120, max_height=120, crop=False),
    SizeSpec(name="thumb_square", max_width=120, max_height=120, crop=True),
]


class RenditionConfig(BaseModel):
    """Configuration loaded once per process."""

    sizes: List[SizeSpec] = Field(default_factory=lambda: list(DEFAULT_IMAGE_SIZES))
    acl: str = DEFAULT_ACL
    supported_types: Tuple[str, ...] = DEFAULT_SUPPORTED_TYPES
    strategy: Literal["threaded", "serial"] = "threaded"
    jpeg_quality: int = Field(default=95, ge=1, le=95)
    debug: bool = False

    @field_validator("sizes")
    @classmethod
    def _unique_size_names(cls, sizes: List[SizeSpec]) -> List[SizeSpec]:
        if not sizes:
            raise ValueError("at least one size must be configured")
        names = [size.name for size in sizes]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate size names: {', '.join(duplicates)}")
        return sizes

    @field_validator("supported_types")
    @classmethod
    def _types_have_encoders(cls, types: Tuple[str, ...]) -> Tuple[str, ...]:
        unknown = [image_type for image_type in types if image_type.lower() not in TYPE_FORMATS]
        if unknown:
            raise ValueError(f"no encoder for image types: {', '.join(unknown)}")
        return types


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}

    sizes = os.getenv("RENDITIONS_SIZES")
    if sizes:
        try:
            overrides["sizes"] = json.loads(sizes)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"RENDITIONS_SIZES is not valid JSON: {exc}") from exc

    if os.getenv("RENDITIONS_ACL"):
        overrides["acl"] = os.environ["RENDITIONS_ACL"]
    if os.getenv("RENDITIONS_STRATEGY"):
        overrides["strategy"] = os.environ["RENDITIONS_STRATEGY"]
    if os.getenv("RENDITIONS_JPEG_QUALITY"):
        overrides["jpeg_quality"] = os.environ["RENDITIONS_JPEG_QUALITY"]
    if os.getenv("RENDITIONS_DEBUG"):
        overrides["debug"] = os.environ["RENDITIONS_DEBUG"].lower() in ("1", "true", "yes")

    return overrides


def load_config(
    path: Optional[Union[str, Path]] = None, **overrides: Any
) -> RenditionConfig:
    """
    Build the configuration from a JSON file, the environment and overrides.

    Later sources win: file, then environment variables, then keyword
    overrides (``None`` values are ignored).

    Environment Variables:
        RENDITIONS_SIZES: JSON list of size specs
        RENDITIONS_ACL: ACL applied to every rendition
        RENDITIONS_STRATEGY: "threaded" or "serial"
        RENDITIONS_JPEG_QUALITY: JPEG quality (1-95)
        RENDITIONS_DEBUG: Enable debug logging

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid
    """
    data: Dict[str, Any] = {}

    if path is not None:
        try:
            data.update(json.loads(Path(path).read_text()))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc

    data.update(_env_overrides())
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return RenditionConfig(**data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
