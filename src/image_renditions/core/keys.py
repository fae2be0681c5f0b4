"""Object key helpers: event key decoding, destination keys and type detection."""

import re
from typing import Iterable, Tuple
from urllib.parse import unquote_plus

from .exceptions import IdenticalKeysError, InvalidKeyShapeError, UnknownImageTypeError

_TYPE_SUFFIX = re.compile(r"\.([^.]*)$")


def decode_event_key(raw_key: str) -> str:
    """Decode an URL-encoded key from an S3 notification ('+' means space)."""
    return unquote_plus(raw_key)


def normalize_bucket(bucket: str) -> str:
    """Keep only the bucket name when a path was appended to it."""
    return bucket.split("/")[0]


def resolve_destination(
    source_bucket: str, source_key: str, size_name: str
) -> Tuple[str, str]:
    """
    Calculate the destination bucket and key of a rendition.

    ``original/abc123/DarthVader.jpg`` resized as ``thumb`` becomes
    ``thumb/abc123/DarthVader.jpg`` in the same bucket. Only the last two
    segments of the source key are kept.

    Args:
        source_bucket: Bucket of the source object
        source_key: Decoded source key
        size_name: Name of the size spec

    Returns:
        (destination_bucket, destination_key)

    Raises:
        InvalidKeyShapeError: If the key has fewer than two segments
        IdenticalKeysError: If the destination would overwrite the source
    """
    segments = source_key.split("/")
    if len(segments) < 2:
        raise InvalidKeyShapeError(
            f"Cannot derive <id>/<filename> from key '{source_key}'"
        )

    dest_bucket = source_bucket
    dest_key = f"{size_name}/{segments[-2]}/{segments[-1]}"

    if dest_bucket == source_bucket and dest_key == source_key:
        raise IdenticalKeysError(
            f"Source and destination are the same: {source_bucket}/{source_key}"
        )

    return dest_bucket, dest_key


def detect_image_type(key: str) -> str:
    """
    Return the suffix after the last '.' of the whole key.

    The suffix may contain '/' when the only dot sits in a directory name
    (``original/v1.2/readme`` gives ``2/readme``). Such a type is never
    supported, so the job is skipped rather than failed.
    """
    match = _TYPE_SUFFIX.search(key)
    if match is None:
        raise UnknownImageTypeError(f"Could not determine the image type of '{key}'")
    return match.group(1)


def is_supported_type(image_type: str, supported_types: Iterable[str]) -> bool:
    # Case-sensitive: "JPG" is not "jpg"
    return image_type in set(supported_types)
