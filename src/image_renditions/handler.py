"""
AWS Lambda handler - image renditions.

Triggered by S3 PutObject notifications (directly or wrapped in SQS).
For every record the source image is resized into each configured size and
stored under ``<size>/<id>/<filename>`` in the same bucket.
"""

import json
import functools
from typing import Any, Dict, List, Tuple

from .core import (
    decode_event_key,
    get_logger,
    normalize_bucket,
)
from .core.factories import PipelineFactory
from .core.services import RenditionPipeline

logger = get_logger("image-renditions.handler")


@functools.lru_cache(maxsize=1)
def get_pipeline() -> RenditionPipeline:
    """Build the pipeline (and its S3 client) once per process."""
    return PipelineFactory.create_pipeline()


def extract_sources(event: Dict[str, Any]) -> List[Tuple[str, str]]:
    """
    Pull (bucket, key) pairs out of an S3 or SQS-wrapped S3 event.

    Keys are URL-decoded and bucket names stripped of any path suffix.
    """
    sources: List[Tuple[str, str]] = []

    for record in event.get("Records", []):
        if record.get("eventSource") == "aws:sqs":
            body = json.loads(record.get("body") or "{}")
            s3_records = body.get("Records", [])
        else:
            s3_records = [record]

        for s3_record in s3_records:
            s3_info = s3_record.get("s3", {})
            bucket = s3_info.get("bucket", {}).get("name", "")
            raw_key = s3_info.get("object", {}).get("key", "")
            if not bucket or not raw_key:
                raise ValueError(f"Record is missing bucket or key: {s3_record}")
            sources.append((normalize_bucket(bucket), decode_event_key(raw_key)))

    return sources


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda entry point.

    Raises:
        RenditionPipelineError: With the first job error of the first failing
            record, so the invoking environment can retry or alert.
    """
    sources = extract_sources(event)
    pipeline = get_pipeline()
    results = []

    for bucket, key in sources:
        logger.info(f"Processing s3://{bucket}/{key}")
        result = pipeline.run(bucket, key)
        results.append(result.summary())
        if not result.success:
            logger.error(f"Unable to resize image due to an error: {result.error}")
            result.raise_for_status()

    return {
        "status": "ok",
        "message": "All files have been processed successfully",
        "results": results,
    }
