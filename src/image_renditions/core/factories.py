"""Factory classes for creating configured service instances."""

import os
from typing import Any, Optional, TYPE_CHECKING

import boto3
from botocore.config import Config

from ..processors import SCHEDULERS
from .config import RenditionConfig, load_config
from .logging_config import set_debug
from .observability import MetricsCollector, StructuredLogger
from .protocols import LoggerProtocol, S3ClientProtocol
from .services import RenditionJob, RenditionPipeline
from .storage import S3ObjectStore
from .transform import ImageTransformer

if TYPE_CHECKING:
    from mypy_boto3_s3.client import S3Client
else:
    S3Client = Any


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(name: str, debug: bool = False) -> StructuredLogger:
        """Create a configured structured logger."""
        logger = StructuredLogger(name)
        if debug:
            set_debug(logger.logger)
        return logger


class S3ClientFactory:
    """Factory for creating S3 client instances."""

    @staticmethod
    def create_s3_client(**kwargs: Any) -> S3Client:
        """
        Create an S3 client whose retry policy lives in botocore.

        Environment Variables:
            RENDITIONS_S3_MAX_ATTEMPTS: Total attempts per call (default 3)
        """
        max_attempts = int(os.getenv("RENDITIONS_S3_MAX_ATTEMPTS", "3"))
        kwargs.setdefault(
            "config",
            Config(retries={"max_attempts": max_attempts, "mode": "standard"}),
        )
        session = boto3.Session()
        return session.client("s3", **kwargs)  # type: ignore


class PipelineFactory:
    """Factory for creating the complete renditions pipeline."""

    @staticmethod
    def create_pipeline(
        s3_client: Optional[S3ClientProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
        config: Optional[RenditionConfig] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ) -> RenditionPipeline:
        """Create a fully configured renditions pipeline."""
        if config is None:
            config = load_config()

        if s3_client is None:
            s3_client = S3ClientFactory.create_s3_client()

        if logger is None:
            logger = LoggerFactory.create_logger("image-renditions", debug=config.debug)

        store = S3ObjectStore(s3_client)
        transformer = ImageTransformer(jpeg_quality=config.jpeg_quality)
        job = RenditionJob(store, transformer, config, logger, metrics_collector)

        return RenditionPipeline(
            job_runner=job,
            run_jobs=SCHEDULERS[config.strategy],
            config=config,
            logger=logger,
        )
